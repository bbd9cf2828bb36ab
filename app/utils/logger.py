import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional
from app.config import settings
from pathlib import Path

log = logging.getLogger(__name__)


class WebhookEventLogger:
    """Logger for saving handled webhooks to a JSONL file."""

    def __init__(self, log_dir: str = None):
        self.log_dir = Path(log_dir or settings.log_dir)
        self.log_file = self.log_dir / "webhooks.jsonl"

    def log_event(
        self,
        event_type: Optional[str],
        sis_id: Optional[str],
        status_code: int,
        body: Dict[str, str],
        student_id: int = None,
        changes: Dict[str, Any] = None
    ):
        """Append one handled webhook to the JSONL file.

        Write failures are reported through the process log only.
        """
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": event_type,
            "sis_id": sis_id,
            "status_code": status_code,
            "body": body,
            "student_id": student_id,
            "changes": changes or {}
        }

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")
        except OSError:
            log.exception("Could not write webhook event to %s", self.log_file)

    def get_events(
        self,
        sis_id: str = None,
        status_code: int = None,
        limit: int = None
    ) -> List[Dict[str, Any]]:
        """Retrieve logged webhooks, optionally filtered."""
        if not self.log_file.exists():
            return []

        events = []
        with open(self.log_file, "r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if sis_id and entry.get("sis_id") != sis_id:
                    continue
                if status_code and entry.get("status_code") != status_code:
                    continue
                events.append(entry)

        # Newest first
        events.sort(key=lambda x: x.get("timestamp", ""), reverse=True)

        if limit:
            events = events[:limit]

        return events
