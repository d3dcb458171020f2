"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Transaction boundary shared by the comment, relation and like repositories.

    Everything written inside ``transaction()`` commits together or not at
    all. Transactions are not nested.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction.

        Usage:
            async with uow.transaction():
                ...
        """
        pass
