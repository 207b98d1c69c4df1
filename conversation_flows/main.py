# /conversation_flows/main.py

import os
import time
import uvicorn
from fastapi import FastAPI, Request

from conversation_flows.config.settings import settings
from conversation_flows.utils.lifecycle import lifespan
from conversation_flows.utils.metrics import response_time_histogram
from conversation_flows.routes import flows, public

# Initialize the FastAPI application
app = FastAPI(
    title=settings.app_title,
    version="1.0.0",
    description="Guided multi-step conversation flows for construction enquiries",
    lifespan=lifespan,
    openapi_url=f"/api/{settings.api_version}/openapi.json" if settings.environment != "production" else None,
    docs_url=f"/api/{settings.api_version}/docs" if settings.environment != "production" else None,
    redoc_url=f"/api/{settings.api_version}/redoc" if settings.environment != "production" else None,
)

@app.middleware("http")
async def performance_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response_time_histogram.labels(endpoint=request.url.path).observe(process_time)
    response.headers["X-Process-Time"] = str(process_time)
    return response

# --- API Routers ---
app.include_router(public.router)
app.include_router(flows.router, prefix=f"/api/{settings.api_version}")

# --- Main Entry Point for Uvicorn (for local development) ---
if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "127.0.0.1")

    uvicorn.run(
        "conversation_flows.main:app",
        host=host,
        port=port,
        reload=True if settings.environment == "development" else False,
    )
