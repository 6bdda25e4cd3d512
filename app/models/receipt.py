from pydantic import Field
from app.models.base import FrozenModel, new_receipt_id

class ScoredReceipt(FrozenModel):
    """A processed receipt: the generated id and the points it earned."""
    id: str = Field(default_factory=lambda: new_receipt_id())
    points: int = Field(..., ge=0)
