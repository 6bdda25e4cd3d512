from typing import List
from pydantic import BaseModel, Field

class ItemBase(BaseModel):
    shortDescription: str = Field(..., description="The Short Product Description for the item.", examples=["Mountain Dew 12PK"])
    price: str = Field(..., description="The total price paid for this item.", examples=["6.49"])

    model_config = {"from_attributes": True, "frozen": True}

class ReceiptBase(BaseModel):
    """Receipt as submitted. Field patterns are checked by app.utils.receipt_validation."""
    retailer: str = Field(..., description="The name of the retailer or store the receipt is from.", examples=["M&M Corner Market"])
    purchaseDate: str = Field(..., description="The date of the purchase printed on the receipt.", examples=["2022-01-01"])
    purchaseTime: str = Field(..., description="The time of the purchase printed on the receipt. 24-hour time expected.", examples=["13:01"])
    items: List[ItemBase] = Field(..., min_length=1)
    total: str = Field(..., description="The total amount paid on the receipt.", examples=["6.49"])

    model_config = {"from_attributes": True, "frozen": True}

class ReceiptCreate(ReceiptBase):
    pass

class ProcessReceiptResponse(BaseModel):
    id: str

class PointsResponse(BaseModel):
    points: int
