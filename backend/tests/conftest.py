from pathlib import Path
from dotenv import load_dotenv
import pytest

# Load environment variables for tests before the app reads its settings
load_dotenv(Path(__file__).resolve().parents[1] / '.env.test')


@pytest.fixture(autouse=True)
def reset_service_rates():
    """Drop the cached rates-file override so each test reads its own config."""
    from movequote.services.rates_loader import get_service_rates

    get_service_rates.cache_clear()
    yield
    get_service_rates.cache_clear()
