from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from brickworld.models import SceneTime


class BrickModel(BaseModel):
    position: List[int]
    color: str
    kind: str
    name: str
    description: Optional[str] = None


class BrickDetail(BrickModel):
    index: int
    inspector: str


class WorldSummary(BaseModel):
    bricks: int
    columns: int
    kinds: dict
    bounds: Optional[dict] = None


class ChatEntry(BaseModel):
    role: Literal["user", "model"]
    text: str


class ChatRequest(BaseModel):
    history: List[ChatEntry] = Field(..., min_length=1)
    time_of_day: SceneTime = SceneTime.DAY


class ChatResponse(BaseModel):
    reply: str


class ExportRequest(BaseModel):
    filename: str = "great-wall"


class JobResponse(BaseModel):
    job_id: str
    status: str
    progress: float
    message: str
    result: Optional[dict] = None


class ExportInfo(BaseModel):
    name: str
    filename: str
    model_url: str
    bricks: Optional[int] = None
    meshes: Optional[int] = None
    faces: Optional[int] = None
