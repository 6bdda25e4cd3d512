from app.db.memory import ReceiptStore, get_store


def get_receipt_store() -> ReceiptStore:
    """Return the active receipt store."""
    return get_store()
