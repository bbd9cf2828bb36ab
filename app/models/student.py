from pydantic import BaseModel
from typing import Any, List, Optional


class Student(BaseModel):
    id: int
    username: str
    sis_id: str
    first_name: str
    last_name: str
    grade_level_id: Optional[int] = None
    reading_level_id: Optional[int] = None
    has_iep: Any = False  # coerced to bool only when sent back


def iep_flag(value: Any) -> bool:
    """Truthiness of a stored has_iep value.

    Lists and objects count as set even when empty, NaN counts as unset.
    """
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, float) and value != value:
        return False
    return bool(value)


class StudentListResponse(BaseModel):
    students: List[Student]


class StudentUpdate(BaseModel):
    """Full student record sent on update, everything but the id."""
    username: str
    sis_id: str
    first_name: str
    last_name: str
    grade_level_id: Optional[int] = None
    reading_level_id: Optional[int] = None
    has_iep: bool

    @classmethod
    def from_student(cls, student: Student) -> "StudentUpdate":
        return cls(
            username=student.username,
            sis_id=student.sis_id,
            first_name=student.first_name,
            last_name=student.last_name,
            grade_level_id=student.grade_level_id,
            reading_level_id=student.reading_level_id,
            has_iep=iep_flag(student.has_iep)
        )
