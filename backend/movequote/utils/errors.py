from typing import Any, Iterable, List, Mapping, Sequence, Union
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

FieldErrors = List[dict]


def error_path(loc: Sequence[Union[str, int]]) -> str:
    """Join a pydantic error location into a dotted path."""
    return ".".join(str(part) for part in loc)


def field_errors_from_pydantic(errors: Iterable[Mapping[str, Any]], *, strip_prefix: str | None = None) -> FieldErrors:
    """Convert pydantic error dicts into ``{"path", "message"}`` entries.

    ``strip_prefix`` drops a leading location segment such as FastAPI's
    ``"body"``.
    """
    out: FieldErrors = []
    for err in errors:
        loc = list(err.get("loc") or ())
        if strip_prefix is not None and loc and loc[0] == strip_prefix:
            loc = loc[1:]
        out.append({"path": error_path(loc), "message": str(err.get("msg") or "Invalid value")})
    return out


def error_response(
    message: str,
    field_errors: FieldErrors,
    code: int = 422,
) -> HTTPException:
    """Return an HTTPException with a consistent structure and log details."""
    logger.error("%s %s", message, field_errors)
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)
