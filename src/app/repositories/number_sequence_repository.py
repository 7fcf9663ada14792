"""Number Sequence Repository Interface

Defines the contract for allocating invoice and receipt numbers.
"""

from abc import ABC, abstractmethod


class NumberSequenceRepository(ABC):
    """
    Repository interface for named, persistence-owned counters

    Allocation is atomic within the caller's transaction: two transactions
    never receive the same value.
    """

    @abstractmethod
    async def next_value(self, name: str, start: int = 1) -> int:
        """
        Allocate the next value of a sequence

        Args:
            name: Sequence name
            start: First value handed out when the sequence does not exist yet

        Returns:
            Allocated value
        """
        pass

    @abstractmethod
    async def peek_next_value(self, name: str, start: int = 1) -> int:
        """
        Value next_value would return, without allocating it

        Only suitable for display (e.g., pre-filling a form).
        """
        pass
