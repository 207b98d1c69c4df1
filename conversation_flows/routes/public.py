# /conversation_flows/routes/public.py

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from datetime import datetime

from conversation_flows.config.settings import settings

# Public endpoints that do not depend on the flow catalog: service info,
# health checks and the Prometheus scrape endpoint.

router = APIRouter()

@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": settings.app_title,
        "status": "operational",
        "environment": settings.environment
    }

@router.get("/health", summary="Basic Health Check")
async def health_check():
    """Basic health check for load balancers."""
    return {"status": "healthy", "timestamp": datetime.utcnow()}

@router.get("/metrics", response_class=PlainTextResponse)
async def metrics():
    """Prometheus metrics in text exposition format."""
    return PlainTextResponse(generate_latest(), media_type=CONTENT_TYPE_LATEST)
