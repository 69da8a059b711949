"""
Celery configuration settings.

Manages Celery broker and result backend configuration for the periodic passes.

Dependencies: pydantic, pydantic_settings
System role: Task queue configuration for scheduled reconciliation
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from firefli.configs.base import FirefliSettings


class CelerySettings(FirefliSettings):
    """Celery broker and result backend configuration."""

    model_config = SettingsConfigDict(env_prefix="CELERY_")

    broker_url: str = Field(default="redis://localhost:6379/0", description="Broker URL")
    result_backend_url: str = Field(
        default="redis://localhost:6379/1",
        description="Result backend URL",
    )

    task_serializer: str = Field(default="json", description="Task serialization format")
    result_serializer: str = Field(default="json", description="Result serialization format")
    accept_content: list[str] = Field(
        default=["json"],
        description="Accepted content types",
    )
    timezone: str = Field(default="UTC", description="Celery timezone")
