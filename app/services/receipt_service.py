import logging
from app.db.session import get_receipt_store
from app.schemas.receipt import ReceiptCreate
from app.services.points_service import calculate_points
from app.utils.receipt_validation import ensure_valid

logger = logging.getLogger(__name__)

class ReceiptService:
    @staticmethod
    def process(receipt_in: ReceiptCreate) -> str:
        """Validate, score and store a receipt; return its new id.

        Raises ReceiptValidationError or CalculationError without touching
        the store.
        """
        ensure_valid(receipt_in)
        points = calculate_points(receipt_in)

        store = get_receipt_store()
        receipt_id = store.put(points)
        logger.info("Processed receipt %s from %r: %d points", receipt_id, receipt_in.retailer, points)
        return receipt_id

    @staticmethod
    def get_points(receipt_id: str) -> int:
        """Points stored for receipt_id; raises ReceiptNotFoundError if unknown."""
        store = get_receipt_store()
        return store.get(receipt_id)
