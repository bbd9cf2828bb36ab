from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    app_name: str = "SIS Webhook Service"
    debug: bool = False

    # Student-records API settings
    students_api_base: str = "http://localhost:3001"
    internal_x_api_key: str = ""

    # Lookup strategies
    student_lookup: Literal["query", "scan"] = "query"
    grade_level_lookup: Literal["collection", "by_name"] = "collection"

    # "message" answers 200 {message}, "error" answers 404 {error}
    student_not_found: Literal["message", "error"] = "message"

    # Application settings
    log_dir: str = "logs"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
