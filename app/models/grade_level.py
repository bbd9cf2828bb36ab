from pydantic import BaseModel
from typing import List


class GradeLevel(BaseModel):
    id: int
    name: str
    sequence: int


class GradeLevelListResponse(BaseModel):
    grade_levels: List[GradeLevel]
