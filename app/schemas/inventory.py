from pydantic import AliasChoices, BaseModel, Field

from app.models.inventory import MAX_QTY

# The dashboard sends "quantity", older clients send "qty"
_QTY_ALIASES = AliasChoices("qty", "quantity")


class InventoryRestock(BaseModel):
    machine_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    qty: int = Field(..., gt=0, le=MAX_QTY, validation_alias=_QTY_ALIASES)


class InventoryUpdate(BaseModel):
    qty: int = Field(..., ge=0, le=MAX_QTY, validation_alias=_QTY_ALIASES)


class InventoryRemove(BaseModel):
    amount: int = Field(..., ge=0, le=MAX_QTY)


class InventoryDistribute(BaseModel):
    product_id: int = Field(..., gt=0)
    total_qty: int = Field(..., gt=0, le=MAX_QTY)


class InventoryResponse(BaseModel):
    inv_id: int
    machine_id: int
    product_id: int
    product_name: str
    price: float
    qty: int

    class Config:
        from_attributes = True


class Allocation(BaseModel):
    machine_id: int
    qty: int


class DistributeResponse(BaseModel):
    ok: bool
    allocations: list[Allocation]


class OkResponse(BaseModel):
    ok: bool
