"""Health check and utility routes"""

from fastapi import APIRouter, Request
import logging

router = APIRouter(tags=["Health"])
logger = logging.getLogger("menuhub.api.health")


@router.get("/health-check")
def health_check(request: Request):
    """Basic health check endpoint"""
    return {"status": "ok", "service": request.app.state.settings.app_name}
