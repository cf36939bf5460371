from typing import List, Optional

from pydantic import field_validator

from jiazheng_assistant.schemas.common import CamelModel
from jiazheng_assistant.schemas.video import VideoData


class ChatRequest(CamelModel):
    message: str = ""
    # None = read the records from the database
    videos: Optional[List[VideoData]] = None
    stream: bool = True

    @field_validator("message", mode="before")
    @classmethod
    def _message(cls, v):
        return "" if v is None else str(v)

class ChatResponse(CamelModel):
    reply: str
    intent: str
    source: str # llm | fallback
    video_count: int
