from pydantic import BaseModel


class MachineResponse(BaseModel):
    machine_id: int
    location: str
    description: str

    class Config:
        from_attributes = True
