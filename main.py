import logging
from fastapi import FastAPI
from app.api.v1 import api_router
from app.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title=settings.app_name,
    description="Receives SIS grade and reading level notifications and updates student records",
    version="1.0.0"
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    return {
        "message": "Welcome to SIS Webhook Service",
        "description": "POST grade_update or reading_update notifications to /api/v1/webhook"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
