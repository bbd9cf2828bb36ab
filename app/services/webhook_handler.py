import logging
from typing import Any, Dict, Literal, Optional
from app.api.student_records_client import StudentRecordsClient
from app.config import Settings
from app.models.webhook import GRADE_UPDATE, READING_UPDATE, WebhookOutcome, WebhookRequest
from app.services.resolvers import (
    GradeLevelResolver,
    ReadingLevelResolver,
    StudentResolver,
    build_student_resolver
)
from app.utils.logger import WebhookEventLogger

logger = logging.getLogger(__name__)

STUDENT_NOT_FOUND = "Student not found"
INVALID_GRADE_LEVEL = "Invalid grade level"
INVALID_READING_LEVEL = "Invalid reading level"
STUDENT_UPDATED = "Student updated successfully"
INTERNAL_ERROR = "Internal server error"


class WebhookHandler:
    """Apply a SIS grade or reading level notification to a student record.

    Downstream calls are made one after another: student lookup, at most
    one grade or reading level lookup, then the update. Any failure that
    is not a missing student or an unknown reference becomes a 500.
    """

    def __init__(
        self,
        client: StudentRecordsClient,
        student_resolver: StudentResolver,
        grade_resolver: GradeLevelResolver,
        reading_resolver: ReadingLevelResolver,
        not_found_variant: Literal["message", "error"] = "message",
        event_logger: Optional[WebhookEventLogger] = None
    ):
        self.client = client
        self.student_resolver = student_resolver
        self.grade_resolver = grade_resolver
        self.reading_resolver = reading_resolver
        self.not_found_variant = not_found_variant
        self.event_logger = event_logger

    async def handle(self, raw_body: bytes) -> WebhookOutcome:
        request: Optional[WebhookRequest] = None
        student_id = None
        changes: Dict[str, Any] = {}

        try:
            request = WebhookRequest.model_validate_json(raw_body or b"{}")

            student = await self.student_resolver.resolve(request.sis_id)
            if student is None:
                logger.info("No student with sis_id %s", request.sis_id)
                outcome = self._student_not_found()
            else:
                student_id = student.id
                outcome = None

                if request.type == GRADE_UPDATE and request.grade:
                    grade_level_id = await self.grade_resolver.resolve(request.grade)
                    if grade_level_id is None:
                        outcome = WebhookOutcome.error(INVALID_GRADE_LEVEL, 400)
                    else:
                        student.grade_level_id = grade_level_id
                        changes["grade_level_id"] = grade_level_id

                if request.type == READING_UPDATE and request.reading_level:
                    reading_level_id = await self.reading_resolver.resolve(request.reading_level)
                    if reading_level_id is None:
                        outcome = WebhookOutcome.error(INVALID_READING_LEVEL, 400)
                    else:
                        student.reading_level_id = reading_level_id
                        changes["reading_level_id"] = reading_level_id

                if outcome is None:
                    await self.client.update_student(student)
                    outcome = WebhookOutcome.message(STUDENT_UPDATED)
        except Exception:
            logger.exception("Webhook error")
            outcome = WebhookOutcome.error(INTERNAL_ERROR, 500)
            changes = {}

        self._record(request, outcome, student_id, changes)
        return outcome

    def _student_not_found(self) -> WebhookOutcome:
        if self.not_found_variant == "error":
            return WebhookOutcome.error(STUDENT_NOT_FOUND, 404)
        return WebhookOutcome.message(STUDENT_NOT_FOUND)

    def _record(
        self,
        request: Optional[WebhookRequest],
        outcome: WebhookOutcome,
        student_id: Optional[int],
        changes: Dict[str, Any]
    ) -> None:
        if self.event_logger is None:
            return
        self.event_logger.log_event(
            event_type=request.type if request else None,
            sis_id=request.sis_id if request else None,
            status_code=outcome.status_code,
            body=outcome.body,
            student_id=student_id,
            changes=changes if outcome.status_code == 200 else {}
        )


def build_webhook_handler(
    settings: Settings,
    client: Optional[StudentRecordsClient] = None,
    event_logger: Optional[WebhookEventLogger] = None
) -> WebhookHandler:
    """Wire a handler from configuration."""
    client = client or StudentRecordsClient(
        api_key=settings.internal_x_api_key,
        base_url=settings.students_api_base
    )
    return WebhookHandler(
        client=client,
        student_resolver=build_student_resolver(client, settings.student_lookup),
        grade_resolver=GradeLevelResolver(client, settings.grade_level_lookup),
        reading_resolver=ReadingLevelResolver(client),
        not_found_variant=settings.student_not_found,
        event_logger=event_logger or WebhookEventLogger(settings.log_dir)
    )
