"""
Runtime configuration for the employee API.

Values come from environment variables unless passed explicitly:
- API_HOST / API_PORT: bind address for `serve`
- QUOTE_API_URL / JOKE_API_URL: external content endpoints
- EXTERNAL_API_TIMEOUT: per-call timeout in seconds
- EMPLOYEE_RULES_PATH: YAML file with the employee field rules
- LOG_LEVEL / LOG_FORMAT: read by src.observability.logger
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from src.employees.external import DEFAULT_JOKE_API_URL, DEFAULT_QUOTE_API_URL
from src.employees.service import DEFAULT_RULES_PATH


class AppConfig(BaseModel):
    """Typed settings container for the API process."""

    host: str = "127.0.0.1"
    port: int = Field(3000, ge=1, le=65535)
    quote_api_url: str = DEFAULT_QUOTE_API_URL
    joke_api_url: str = DEFAULT_JOKE_API_URL
    external_api_timeout: float = Field(3.0, gt=0)
    rules_path: Path = DEFAULT_RULES_PATH

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        """
        Build a config from environment variables.

        Args:
            **overrides: Explicit values that take precedence (None is ignored)
        """
        values = {
            "host": os.getenv("API_HOST", "127.0.0.1"),
            "port": int(os.getenv("API_PORT", "3000")),
            "quote_api_url": os.getenv("QUOTE_API_URL", DEFAULT_QUOTE_API_URL),
            "joke_api_url": os.getenv("JOKE_API_URL", DEFAULT_JOKE_API_URL),
            "external_api_timeout": float(os.getenv("EXTERNAL_API_TIMEOUT", "3.0")),
            "rules_path": os.getenv("EMPLOYEE_RULES_PATH", str(DEFAULT_RULES_PATH)),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
