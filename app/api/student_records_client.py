import httpx
from typing import Optional
from urllib.parse import quote
from app.config import settings
from app.models.student import Student, StudentListResponse, StudentUpdate
from app.models.grade_level import GradeLevelListResponse
from app.models.reading_level import ReadingLevelListResponse


class StudentRecordsClient:
    """Client for interacting with the student-records API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.internal_x_api_key
        self.base_url = (base_url or settings.students_api_base).rstrip("/")
        self._transport = transport
        self._headers = {
            "X-Api-Key": self.api_key,
            "Content-Type": "application/json"
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers,
            transport=self._transport
        )

    async def find_students(self, sis_id: str) -> StudentListResponse:
        """Query students filtered by their SIS id."""
        async with self._client() as client:
            response = await client.get("/students", params={"sisId": sis_id})
            response.raise_for_status()
            return StudentListResponse(**response.json())

    async def get_students(self) -> StudentListResponse:
        """List every student."""
        async with self._client() as client:
            response = await client.get("/students")
            response.raise_for_status()
            return StudentListResponse(**response.json())

    async def get_grade_levels(self) -> GradeLevelListResponse:
        """List all grade levels."""
        async with self._client() as client:
            response = await client.get("/grade_levels")
            response.raise_for_status()
            return GradeLevelListResponse(**response.json())

    async def find_grade_levels(self, name: str) -> GradeLevelListResponse:
        """Get grade levels matching a display name such as "3rd"."""
        async with self._client() as client:
            response = await client.get(f"/grade_levels/{quote(name, safe='')}")
            response.raise_for_status()
            return GradeLevelListResponse(**response.json())

    async def find_reading_levels(self, code: str) -> ReadingLevelListResponse:
        """Get reading levels matching a code."""
        async with self._client() as client:
            response = await client.get(f"/reading_levels/{quote(code, safe='')}")
            response.raise_for_status()
            return ReadingLevelListResponse(**response.json())

    async def update_student(self, student: Student) -> None:
        """Send the full student record back to the API."""
        update_data = StudentUpdate.from_student(student)

        async with self._client() as client:
            response = await client.put(
                f"/students/{student.id}",
                json=update_data.model_dump()
            )
            response.raise_for_status()
