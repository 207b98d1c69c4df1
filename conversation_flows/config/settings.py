# /conversation_flows/config/settings.py

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Deployment
    environment: str = "production"
    log_level: str = "INFO"

    # App Metadata
    api_version: str = "v1"
    app_title: str = "Conversation Flow Engine"

    # Branding used in user-facing messages
    company_name: str = "Laguna Bay Development"
    emergency_contact_number: str = "(555) 123-4567"
    emergency_services_number: str = "911"

    # Flow Behavior
    # When a flow is freshly selected and the caller sends no step, open the
    # flow at its first step instead of reporting it as completed.
    start_flow_on_empty_step: bool = True

    # ---------------- Validators ---------------- #

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"LOG_LEVEL '{v}' is not a valid logging level")
        return level

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
