from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr
from typing import Optional, Union
from datetime import datetime
from app.domain.models import ProductType

# Create payloads are deliberately loose: shape and range checks happen in
# validation.py so every problem is reported together with a 400.
class ProductCreate(BaseModel):
    part_number: Optional[str] = None
    product_type: Optional[str] = None
    description: Optional[str] = None

class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    part_number: str
    product_type: ProductType
    description: Optional[str] = None
    created_at: datetime

class BatchCreate(BaseModel):
    batch_code: Optional[str] = None
    # Strict so JSON true/false is rejected instead of read as 1/0
    product_id: Optional[Union[StrictInt, StrictStr]] = None
    quantity: Optional[Union[StrictInt, StrictFloat, StrictStr]] = None
    produced_by: Optional[str] = None
    production_line: Optional[str] = None
    remarks: Optional[str] = None

class BatchRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    batch_code: str
    product_id: int
    quantity: int
    produced_by: Optional[str] = None
    production_line: Optional[str] = None
    remarks: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

class BatchWithProductRead(BatchRead):
    # Joined from the product; None if the product row is gone
    part_number: Optional[str] = None
    product_type: Optional[ProductType] = None
    description: Optional[str] = None

class NextBatchCode(BaseModel):
    product_id: int
    batch_code: str

class FieldErrorRead(BaseModel):
    field: str
    message: str

class ErrorResponse(BaseModel):
    error: str
    errors: list[FieldErrorRead] = []
