"""Background workers for the invoicing service"""
from .overdue_sweeper import OverdueSweeperWorker
from .payment_reconciler import PaymentReconcilerWorker

__all__ = ["OverdueSweeperWorker", "PaymentReconcilerWorker"]
