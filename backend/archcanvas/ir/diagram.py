from pydantic import BaseModel, Field
from typing import List, Optional

from .categories import ConnectionKind


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Component(BaseModel):
    id: str
    type: str                      # open string, see normalize_component_type
    label: str
    description: Optional[str] = None
    technology: Optional[str] = None
    position: Position = Field(default_factory=Position)


class Connection(BaseModel):
    id: str
    source: str
    target: str
    kind: ConnectionKind = ConnectionKind.API
    label: Optional[str] = None
    description: Optional[str] = None
    bidirectional: bool = False


class Diagram(BaseModel):
    components: List[Component] = Field(default_factory=list)
    connections: List[Connection] = Field(default_factory=list)
    title: str = "System Architecture"
    description: str = "AI-generated system design"
