import logging
from fastapi import APIRouter, HTTPException, status
from app.db.memory import ReceiptNotFoundError
from app.schemas.receipt import ReceiptCreate, ProcessReceiptResponse, PointsResponse
from app.services.points_service import CalculationError
from app.services.receipt_service import ReceiptService
from app.utils.receipt_validation import ReceiptValidationError

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_RECEIPT = "The receipt is invalid."
RECEIPT_NOT_FOUND = "No receipt found for that ID."

@router.post(
    "/process",
    response_model=ProcessReceiptResponse,
    responses={400: {"description": INVALID_RECEIPT}},
)
async def process_receipt(receipt_in: ReceiptCreate):
    """Score a receipt and return the id it was stored under"""
    try:
        receipt_id = ReceiptService.process(receipt_in)
    except ReceiptValidationError as e:
        logger.info("Rejected receipt: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": INVALID_RECEIPT,
                "errors": [{"field": v.field, "message": v.message} for v in e.violations],
            },
        )
    except CalculationError as e:
        logger.warning("Receipt passed validation but could not be scored: %s", e)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": INVALID_RECEIPT, "errors": [{"field": None, "message": str(e)}]},
        )
    return ProcessReceiptResponse(id=receipt_id)

@router.get(
    "/{receipt_id}/points",
    response_model=PointsResponse,
    responses={404: {"description": RECEIPT_NOT_FOUND}},
)
async def get_points(receipt_id: str):
    """Get the points awarded for a receipt"""
    try:
        points = ReceiptService.get_points(receipt_id)
    except ReceiptNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=RECEIPT_NOT_FOUND)
    return PointsResponse(points=points)
