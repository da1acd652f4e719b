"""
Transaction state management.
"""

from .transaction import TransactionManager, TransactionState

__all__ = ["TransactionManager", "TransactionState"]
