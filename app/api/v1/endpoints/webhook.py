from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict, List, Optional
from app.config import settings
from app.services.webhook_handler import WebhookHandler, build_webhook_handler

router = APIRouter()
_handler = None


def get_webhook_handler() -> WebhookHandler:
    """Shared handler built from settings on first use."""
    global _handler
    if _handler is None:
        _handler = build_webhook_handler(settings)
    return _handler


@router.post("", include_in_schema=False)
@router.post("/")
async def receive_webhook(
    request: Request,
    handler: WebhookHandler = Depends(get_webhook_handler)
):
    """Apply a grade_update or reading_update notification from the SIS."""
    raw_body = await request.body()
    outcome = await handler.handle(raw_body)
    return JSONResponse(content=outcome.body, status_code=outcome.status_code)


@router.get("/events", response_model=List[Dict[str, Any]])
async def list_webhook_events(
    sis_id: Optional[str] = None,
    status_code: Optional[int] = None,
    limit: Optional[int] = None,
    handler: WebhookHandler = Depends(get_webhook_handler)
):
    """List handled webhooks, newest first."""
    if handler.event_logger is None:
        return []
    return handler.event_logger.get_events(sis_id=sis_id, status_code=status_code, limit=limit)
