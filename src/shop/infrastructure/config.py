"""Application settings via pydantic-settings.

Settings are read from environment variables prefixed with SHOP_ and,
optionally, from a .env file in the working directory.
Example: SHOP_MAX_RETRIES=5 SHOP_RETRY_BACKOFF=exponential
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shop.application.retry import Backoff, RetryPolicy


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="SHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage for the JSON cart and order files
    data_dir: Path = Field(default=Path("data"))

    # Payment processor
    payment_url: str = Field(default="http://localhost:8080/api/v1")
    payment_timeout: float = Field(default=5.0, gt=0)

    # Retries for payment and order creation
    max_retries: int = Field(default=3, ge=0)
    retry_backoff: Literal["none", "constant", "exponential"] = Field(default="exponential")
    retry_delay: float = Field(default=0.5, ge=0)
    retry_max_delay: Optional[float] = Field(default=10.0, ge=0)

    # Delay before a failed order creation is tried again in the background
    reschedule_delay: float = Field(default=3600.0, ge=0)

    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None)

    @field_validator("data_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        """Expand ~ to the home directory."""
        if v is None:
            return None
        return Path(v).expanduser()

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            backoff=Backoff(self.retry_backoff),
            delay=self.retry_delay,
            max_delay=self.retry_max_delay,
        )
