"""
Transaction manager emulating nested transactions with savepoints.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generator

from ..utils import get_logger

if TYPE_CHECKING:
    from ..adapters.base import DatabaseAdapter
    from ..dialects.base import Dialect


@dataclass
class TransactionState:
    """
    ``depth`` 0 means no transaction, 1 the physical one, N adds N - 1 savepoints.
    """

    depth: int = 0


class TransactionManager:
    """
    Coordinates start/commit/rollback over a single physical transaction.
    """

    def __init__(self, adapter: "DatabaseAdapter", dialect: "Dialect") -> None:
        self.adapter = adapter
        self.dialect = dialect
        self.state = TransactionState()
        self.logger = get_logger("persistence.transaction")

    @property
    def depth(self) -> int:
        return self.state.depth

    def start(self, as_savepoint: bool = False) -> None:
        if not as_savepoint or self.state.depth == 0:
            self.adapter.begin()
            self.state.depth = 1
            return

        name = self._savepoint(self.state.depth)
        self.adapter.execute(f"SAVEPOINT {name}")
        self.state.depth += 1
        self.logger.debug("Savepoint %s created (depth=%s)", name, self.state.depth)

    def commit(self, to_savepoint: bool = False) -> None:
        if not to_savepoint or self.state.depth <= 1:
            self.adapter.commit()
            self.state.depth = 0
            return

        if self.dialect.capabilities.supports_savepoint_release:
            name = self._savepoint(self.state.depth - 1)
            self.adapter.execute(f"RELEASE SAVEPOINT {name}")
        # Without release support the marker is dropped with the transaction.
        self.state.depth -= 1

    def rollback(self, to_savepoint: bool = False) -> None:
        if not to_savepoint or self.state.depth <= 1:
            self.adapter.rollback()
            self.state.depth = 0
            return

        name = self._savepoint(self.state.depth - 1)
        self.adapter.execute(f"ROLLBACK TO SAVEPOINT {name}")
        self.state.depth -= 1
        self.logger.debug("Rolled back to savepoint %s (depth=%s)", name, self.state.depth)

    def reset(self) -> None:
        self.state.depth = 0

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """
        Run a block in a transaction, nesting as a savepoint when one is open.
        """

        self.start(as_savepoint=True)
        try:
            yield
        except Exception:
            self.rollback(to_savepoint=True)
            raise
        else:
            self.commit(to_savepoint=True)

    def _savepoint(self, depth: int) -> str:
        return self.dialect.quote_identifier(self.dialect.savepoint_name(depth))
