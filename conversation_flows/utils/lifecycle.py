# /conversation_flows/utils/lifecycle.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from conversation_flows.utils.logging import setup_logging
from conversation_flows.workflows.definitions import WORKFLOWS
from conversation_flows.workflows.validator import validate_catalog

# This file manages the application's lifespan: logging setup and a one-off
# integrity check of the flow catalog at startup.

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    setup_logging()

    logger.info("Application starting up...")

    problems = validate_catalog(WORKFLOWS)
    for problem in problems:
        logger.error(
            f"Flow '{problem['flow_type']}' step '{problem['step_id']}': {problem['message']}"
        )
    logger.info(f"Loaded {len(WORKFLOWS)} conversation flows ({len(problems)} transition problem(s)).")

    yield  # Application is now running

    logger.info("Application shutting down...")
