from .pricing import (
    DaySplitOut,
    DaySplitRequest,
    FieldError,
    HandicapsIn,
    MoveSizePreset,
    PricingCatalog,
    PricingRequest,
    PricingRequestError,
    PricingResponse,
    RatesIn,
)
