from pydantic import BaseModel
from typing import List


class ReadingLevel(BaseModel):
    id: int
    code: str
    name: str


class ReadingLevelListResponse(BaseModel):
    reading_levels: List[ReadingLevel]
