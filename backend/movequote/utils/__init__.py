from .bands import first_band
from .errors import error_response, field_errors_from_pydantic
