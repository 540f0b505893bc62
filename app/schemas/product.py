from decimal import Decimal
from pydantic import BaseModel, Field, field_validator


class ProductCreate(BaseModel):
    name: str

    # zero is a valid price, only presence is required
    price: Decimal = Field(
        ...,
        ge=0,
        lt=100_000_000,
        description="Price must be below 100 million"
    )

    unit: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class ProductUpdate(ProductCreate):
    pass


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    unit: str

    class Config:
        from_attributes = True


class ProductCreated(BaseModel):
    message: str
    product_id: int


class MessageResponse(BaseModel):
    message: str
