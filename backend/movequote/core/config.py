from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator
from typing import Annotated, Any, ClassVar
import json
from pathlib import Path
import os


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Moving Pricing API"

    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]

    # Root logger level; see core.observability
    LOG_LEVEL: str = "INFO"

    # Currency label echoed on pricing responses. The engine itself is
    # currency-agnostic.
    DEFAULT_CURRENCY: str = "USD"

    # Optional JSON document with service-wide rate overrides, in the same
    # shape as the ``rates`` field of a pricing request. Relative paths
    # resolve against the backend directory.
    PRICING_RATES_FILE: str = ""

    # CORS origins for browser callers (the CRM quote form)
    CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=True,
    )

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Any) -> list[str]:
        """Parse comma-separated or JSON list of origins from environment."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("LOG_LEVEL", "DEFAULT_CURRENCY", mode="before")
    def upper_strip(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("PRICING_RATES_FILE", mode="before")
    def strip_path(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    def rates_file_path(self) -> Path | None:
        if not self.PRICING_RATES_FILE:
            return None
        path = Path(self.PRICING_RATES_FILE)
        if not path.is_absolute():
            path = self.BASE_DIR / path
        return path


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[2] / ".env")))


settings = load_settings()
