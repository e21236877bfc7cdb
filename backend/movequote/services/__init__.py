from .moving_quote import (
    breakdown_from_response,
    breakdown_to_response,
    calculate_pricing_from_request,
    validate_pricing_request,
)
