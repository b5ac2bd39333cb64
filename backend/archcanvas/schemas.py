from pydantic import BaseModel, Field
from typing import Optional


class GenerateRequest(BaseModel):
    prompt: str


class PositionUpdateRequest(BaseModel):
    x: float
    y: float


class SelectRequest(BaseModel):
    component_id: Optional[str] = None


class ViewportRequest(BaseModel):
    x: float = 0.0
    y: float = 0.0
    zoom: float = Field(default=1.0, gt=0)
