"""
Unit of Work Pattern

Wraps a unit of work in a single database transaction and translates
storage failures into StoreError at that boundary.
"""

from abc import ABC, abstractmethod
import logging

from django.db import DatabaseError, transaction

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the underlying store fails (connectivity, constraint violation)."""


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        """Commit the transaction"""
        pass

    @abstractmethod
    def rollback(self):
        """Rollback the transaction"""
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Everything executed inside the block runs in one transaction.atomic().
    Row locks taken with SELECT ... FOR UPDATE are held until the block exits.

    Usage:
        with DjangoUnitOfWork() as uow:
            product = product_repo.get(product_id, lock=True)
            ...
            # Transaction commits here
    """

    def __init__(self):
        self._transaction = None

    def __enter__(self):
        """Start database transaction"""
        self._transaction = transaction.atomic()
        try:
            self._transaction.__enter__()
        except DatabaseError as exc:
            raise StoreError(str(exc)) from exc
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Complete or rollback transaction"""
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                try:
                    self._transaction.__exit__(exc_type, exc_val, exc_tb)
                except DatabaseError as exc:
                    # commit itself failed (deferred constraint, lost connection)
                    raise StoreError(str(exc)) from exc

        if exc_type is not None and issubclass(exc_type, DatabaseError):
            raise StoreError(str(exc_val)) from exc_val
        return False

    def commit(self):
        logger.debug("Committing unit of work")

    def rollback(self):
        logger.warning("Rolling back unit of work")
