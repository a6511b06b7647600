import logging
import time
from typing import Callable

from shared.exceptions import DuplicateIdError, NotFoundError, ValidationError

from .schemas import Transaction

logger = logging.getLogger(__name__)


class Ledger:
    """Append-only transaction log with a transaction_id -> position index."""

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self.clock = clock
        self._entries: list[Transaction] = []
        self._positions: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, transaction_id: str, action_type: str, details: str, actor: str) -> str:
        if not transaction_id or not transaction_id.strip():
            raise ValidationError("transaction_id", "must not be blank")
        if not action_type or not action_type.strip():
            raise ValidationError("action_type", "must not be blank")
        if transaction_id in self._positions:
            logger.warning(f"Rejected duplicate transaction '{transaction_id}'")
            raise DuplicateIdError(transaction_id)

        transaction = Transaction(
            transaction_id=transaction_id,
            timestamp=self.clock(),
            action_type=action_type,
            details=details,
            actor=actor,
        )
        self._positions[transaction_id] = len(self._entries)
        self._entries.append(transaction)
        logger.info(f"Recorded transaction '{transaction_id}' ({action_type}) by {actor}")
        return f"Transaction '{transaction_id}' successfully added."

    def get(self, transaction_id: str) -> Transaction:
        position = self._positions.get(transaction_id)
        if position is None:
            raise NotFoundError(transaction_id, kind="transaction")
        return self._entries[position].model_copy()

    def list_all(self) -> list[Transaction]:
        return [entry.model_copy() for entry in self._entries]
