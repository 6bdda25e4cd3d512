import uuid

from pydantic import BaseModel, ConfigDict


def new_receipt_id() -> str:
    """Random UUID4 text; carries no information about the receipt."""
    return str(uuid.uuid4())


class FrozenModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        from_attributes=True
    )
