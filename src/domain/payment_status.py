"""Payment status rules

Pure functions mapping an invoice's total and paid amount onto its status.
Every place that compares paid against total goes through these.
"""

from decimal import Decimal
from src.domain.invoice import InvoiceStatus

# The only statuses derive_status produces; the others are set by an explicit
# action or the overdue sweep
DERIVED_STATUSES = frozenset(
    {InvoiceStatus.PENDING, InvoiceStatus.PARTIALLY_PAID, InvoiceStatus.PAID}
)


def derive_status(total: Decimal, paid_amount: Decimal) -> InvoiceStatus:
    """
    Derive payment status from amounts

    - paid_amount >= total      -> PAID
    - 0 < paid_amount < total   -> PARTIALLY_PAID
    - paid_amount <= 0          -> PENDING
    """
    if paid_amount >= total:
        return InvoiceStatus.PAID
    if paid_amount > 0:
        return InvoiceStatus.PARTIALLY_PAID
    return InvoiceStatus.PENDING


def reconcile_status(
    current: InvoiceStatus, total: Decimal, paid_amount: Decimal
) -> InvoiceStatus:
    """
    Status to keep when repairing an invoice from its ledger

    CANCELLED is always kept. DRAFT and OVERDUE are kept unless the ledger
    settles the invoice. Derived statuses are recomputed.
    """
    derived = derive_status(total, paid_amount)

    if current in DERIVED_STATUSES:
        return derived
    if current == InvoiceStatus.CANCELLED or derived != InvoiceStatus.PAID:
        return current
    return derived


def remaining_balance(total: Decimal, paid_amount: Decimal) -> Decimal:
    return total - paid_amount
