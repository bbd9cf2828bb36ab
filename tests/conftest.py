import json
import httpx
import pytest
from fastapi.testclient import TestClient
from main import app
from app.api.student_records_client import StudentRecordsClient
from app.api.v1.endpoints.webhook import get_webhook_handler
from app.config import Settings
from app.services.webhook_handler import build_webhook_handler

BASE_URL = "http://students.test"
API_KEY = "test-key"

STUDENT = {
    "id": 42,
    "username": "jdoe",
    "sis_id": "S123",
    "first_name": "Jane",
    "last_name": "Doe",
    "grade_level_id": 2,
    "reading_level_id": 11,
    "has_iep": 1
}

OTHER_STUDENT = {
    "id": 7,
    "username": "bsmith",
    "sis_id": "S456",
    "first_name": "Bob",
    "last_name": "Smith",
    "grade_level_id": 3,
    "reading_level_id": None,
    "has_iep": False
}

GRADE_LEVELS = [
    {"id": 1, "name": "Kindergarten", "sequence": 0},
    {"id": 3, "name": "1st", "sequence": 1},
    {"id": 6, "name": "3rd", "sequence": 3},
    {"id": 9, "name": "5th", "sequence": 5}
]

READING_LEVELS = [
    {"id": 11, "code": "A", "name": "Level A"},
    {"id": 20, "code": "J", "name": "Level J"}
]


class FakeStudentRecordsAPI:
    """In-process stand-in for the student-records API, records every request."""

    def __init__(self, students=None, grade_levels=None, reading_levels=None):
        self.students = [dict(s) for s in (students or [])]
        self.grade_levels = list(grade_levels or [])
        self.reading_levels = list(reading_levels or [])
        self.requests = []
        self.updates = []
        self.update_status = 200
        self.overrides = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if (request.method, path) in self.overrides:
            return self.overrides[(request.method, path)](request)

        if request.method == "GET" and path == "/students":
            sis_id = request.url.params.get("sisId")
            students = [s for s in self.students if sis_id is None or s["sis_id"] == sis_id]
            return httpx.Response(200, json={"students": students})

        if request.method == "GET" and path == "/grade_levels":
            return httpx.Response(200, json={"grade_levels": self.grade_levels})

        if request.method == "GET" and path.startswith("/grade_levels/"):
            name = path[len("/grade_levels/"):]
            matches = [g for g in self.grade_levels if g["name"] == name]
            return httpx.Response(200, json={"grade_levels": matches})

        if request.method == "GET" and path.startswith("/reading_levels/"):
            code = path[len("/reading_levels/"):]
            matches = [r for r in self.reading_levels if r["code"] == code]
            return httpx.Response(200, json={"reading_levels": matches})

        if request.method == "PUT" and path.startswith("/students/"):
            student_id = int(path[len("/students/"):])
            body = json.loads(request.content)
            self.updates.append((student_id, body))
            return httpx.Response(self.update_status, json={"student": body})

        return httpx.Response(404, json={"error": "Not found"})

    @property
    def calls(self):
        return [(r.method, r.url.path) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_settings(log_dir, **overrides) -> Settings:
    return Settings(
        _env_file=None,
        students_api_base=BASE_URL,
        internal_x_api_key=API_KEY,
        log_dir=str(log_dir),
        **overrides
    )


def make_records_client(fake_api: FakeStudentRecordsAPI) -> StudentRecordsClient:
    return StudentRecordsClient(api_key=API_KEY, base_url=BASE_URL, transport=fake_api.transport())


@pytest.fixture
def fake_api():
    return FakeStudentRecordsAPI(
        students=[STUDENT, OTHER_STUDENT],
        grade_levels=GRADE_LEVELS,
        reading_levels=READING_LEVELS
    )


@pytest.fixture
def records_client(fake_api):
    return make_records_client(fake_api)


@pytest.fixture
def make_test_client(tmp_path):
    """Build a TestClient whose webhook handler talks to a fake API."""
    def _make(fake_api: FakeStudentRecordsAPI, **overrides) -> TestClient:
        settings = make_settings(tmp_path, **overrides)
        handler = build_webhook_handler(settings, client=make_records_client(fake_api))
        app.dependency_overrides[get_webhook_handler] = lambda: handler
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_test_client, fake_api):
    return make_test_client(fake_api)
