import logging
import threading
from typing import Dict, Optional

from app.models.receipt import ScoredReceipt

logger = logging.getLogger(__name__)


class ReceiptNotFoundError(KeyError):
    """No receipt was stored under the requested id."""


class ReceiptStore:
    """Thread-safe id -> points mapping held in process memory.

    Entries are written once and never changed or removed. The lock is held
    only for the single dict operation of each put/get.
    """

    def __init__(self):
        self._receipts: Dict[str, ScoredReceipt] = {}
        self._lock = threading.Lock()

    def put(self, points: int) -> str:
        """Store points under a freshly generated id and return the id."""
        with self._lock:
            scored = ScoredReceipt(points=points)
            while scored.id in self._receipts:
                scored = ScoredReceipt(points=points)
            self._receipts[scored.id] = scored
        return scored.id

    def get(self, receipt_id: str) -> int:
        with self._lock:
            scored = self._receipts.get(receipt_id)
        if scored is None:
            raise ReceiptNotFoundError(receipt_id)
        return scored.points

    def __contains__(self, receipt_id: object) -> bool:
        with self._lock:
            return receipt_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)


class MemoryDatabase:
    """Holds the process-wide receipt store."""

    store: Optional[ReceiptStore] = None

memory_db = MemoryDatabase()
_holder_lock = threading.Lock()

def open_store() -> ReceiptStore:
    """Create a fresh store for this process."""
    with _holder_lock:
        memory_db.store = ReceiptStore()
        store = memory_db.store
    logger.info("Opened in-memory receipt store")
    return store

def close_store() -> None:
    """Drop the store; its receipts are gone with it."""
    with _holder_lock:
        store, memory_db.store = memory_db.store, None
    if store is not None:
        logger.info("Closing receipt store holding %d receipts", len(store))

def get_store() -> ReceiptStore:
    """Get the store instance, opening one on first use."""
    store = memory_db.store
    if store is not None:
        return store
    with _holder_lock:
        # another caller may have opened it while we waited
        if memory_db.store is None:
            memory_db.store = ReceiptStore()
            logger.info("Opened in-memory receipt store")
        return memory_db.store
