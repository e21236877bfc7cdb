"""Service-wide rate overrides.

Tenant or seasonal pricing is resolved here, before the engine runs, by
reading ``PRICING_RATES_FILE`` into a :class:`RatesConfig`. The engine's
default tables are never modified.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..core.config import settings
from ..schemas.pricing import RatesIn
from ..service_types.moving import RatesConfig
from ..utils.errors import field_errors_from_pydantic
from .moving_quote import rates_config_from_schema

logger = logging.getLogger(__name__)


class RatesConfigError(RuntimeError):
    """The configured rates file is missing or malformed."""

    def __init__(self, path: Path, message: str, field_errors: Optional[list] = None):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.field_errors = field_errors or []


def load_rates_file(path: Path) -> RatesConfig:
    """Read and validate a rates override document."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise RatesConfigError(path, "rates file not found") from exc
    except json.JSONDecodeError as exc:
        raise RatesConfigError(path, f"invalid JSON: {exc.msg}") from exc
    try:
        rates = RatesIn.model_validate(raw)
    except ValidationError as exc:
        errors = field_errors_from_pydantic(exc.errors())
        raise RatesConfigError(path, "invalid rates document", errors) from exc
    logger.info("Loaded pricing rate overrides", extra={"rates_file": str(path)})
    return rates_config_from_schema(rates)


@lru_cache(maxsize=1)
def get_service_rates() -> Optional[RatesConfig]:
    """Return the service-wide override, or ``None`` when not configured."""
    path = settings.rates_file_path()
    if path is None:
        return None
    return load_rates_file(path)
