"""Resolve SIS-side values into student-records ids.

Each resolver returns None when nothing matches. Downstream failures
(transport errors, non-2xx responses, malformed envelopes) propagate.
"""
from abc import ABC, abstractmethod
from typing import Dict, Literal, Optional
from app.api.student_records_client import StudentRecordsClient
from app.models.student import Student

# SIS grade codes mapped to grade level names
GRADE_CODES: Dict[str, str] = {
    "K": "Kindergarten",
    "1": "1st",
    "2": "2nd",
    "3": "3rd",
    "4": "4th",
    "5": "5th",
    "6": "6th",
    "7": "7th",
    "8": "8th"
}


def translate_grade_code(code: str) -> Optional[str]:
    """Map a SIS grade code ("K", "3") to its grade level name."""
    return GRADE_CODES.get(code)


class StudentResolver(ABC):
    """Find a student by SIS id, None when there is no match."""

    @abstractmethod
    async def resolve(self, sis_id: Optional[str]) -> Optional[Student]:
        pass


class QueryStudentResolver(StudentResolver):
    """Ask the API for students with the given SIS id and take the first."""

    def __init__(self, client: StudentRecordsClient):
        self.client = client

    async def resolve(self, sis_id: Optional[str]) -> Optional[Student]:
        if not sis_id:
            return None
        response = await self.client.find_students(sis_id)
        return response.students[0] if response.students else None


class ScanStudentResolver(StudentResolver):
    """Fetch every student and filter locally.

    Cost grows with the whole student population, prefer
    QueryStudentResolver when the API supports the sisId filter.
    """

    def __init__(self, client: StudentRecordsClient):
        self.client = client

    async def resolve(self, sis_id: Optional[str]) -> Optional[Student]:
        if not sis_id:
            return None
        response = await self.client.get_students()
        return next((s for s in response.students if s.sis_id == sis_id), None)


class GradeLevelResolver:
    def __init__(
        self,
        client: StudentRecordsClient,
        strategy: Literal["collection", "by_name"] = "collection"
    ):
        self.client = client
        self.strategy = strategy

    async def resolve(self, code: str) -> Optional[int]:
        """Return the grade level id for a SIS grade code, or None."""
        name = translate_grade_code(code)
        if name is None:
            return None

        if self.strategy == "by_name":
            response = await self.client.find_grade_levels(name)
        else:
            response = await self.client.get_grade_levels()

        grade_level = next((g for g in response.grade_levels if g.name == name), None)
        return grade_level.id if grade_level else None


class ReadingLevelResolver:
    def __init__(self, client: StudentRecordsClient):
        self.client = client

    async def resolve(self, code: str) -> Optional[int]:
        """Return the id of the first reading level matching the code."""
        response = await self.client.find_reading_levels(code)
        return response.reading_levels[0].id if response.reading_levels else None


def build_student_resolver(
    client: StudentRecordsClient,
    strategy: Literal["query", "scan"]
) -> StudentResolver:
    if strategy == "scan":
        return ScanStudentResolver(client)
    return QueryStudentResolver(client)
