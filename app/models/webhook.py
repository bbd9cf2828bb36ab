from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Optional

GRADE_UPDATE = "grade_update"
READING_UPDATE = "reading_update"


class WebhookRequest(BaseModel):
    """Inbound notification from the SIS.

    Every field is optional: the payload shape is trusted and a missing
    sis_id just fails to match any student. Numeric values such as
    "grade": 5 are read as their string form.
    """
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    type: Optional[str] = None
    sis_id: Optional[str] = None
    grade: Optional[str] = None
    reading_level: Optional[str] = None
    x_api_key: Optional[str] = Field(default=None, alias="x-api-key")


class WebhookOutcome(BaseModel):
    status_code: int
    body: Dict[str, str]

    @classmethod
    def message(cls, text: str, status_code: int = 200) -> "WebhookOutcome":
        return cls(status_code=status_code, body={"message": text})

    @classmethod
    def error(cls, text: str, status_code: int) -> "WebhookOutcome":
        return cls(status_code=status_code, body={"error": text})
