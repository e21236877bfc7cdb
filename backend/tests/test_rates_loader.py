import json
from decimal import Decimal
from pathlib import Path

import pytest

from movequote.core.config import settings
from movequote.service_types.moving import BillingService
from movequote.services import rates_loader
from movequote.services.rates_loader import RatesConfigError, get_service_rates, load_rates_file

EXAMPLE = Path(__file__).resolve().parents[1] / "config" / "rates.example.json"


def test_example_rates_file_is_valid():
    rates = load_rates_file(EXAMPLE)
    assert rates.base_hourly_rates[BillingService.MOVING][2] == Decimal("179")
    assert rates.additional_mover_rates[BillingService.WHITE_GLOVE] == Decimal("75")
    assert rates.additional_truck_hourly == Decimal("35")


def test_missing_rates_file(tmp_path):
    with pytest.raises(RatesConfigError) as exc_info:
        load_rates_file(tmp_path / "nope.json")
    assert "not found" in str(exc_info.value)


def test_malformed_json(tmp_path):
    path = tmp_path / "rates.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(RatesConfigError) as exc_info:
        load_rates_file(path)
    assert "invalid JSON" in str(exc_info.value)


def test_invalid_rates_document_lists_fields(tmp_path):
    path = tmp_path / "rates.json"
    path.write_text(json.dumps({"additionalTruckPerHour": -1, "emergencyPerHour": "x"}), encoding="utf-8")
    with pytest.raises(RatesConfigError) as exc_info:
        load_rates_file(path)
    paths = {e["path"] for e in exc_info.value.field_errors}
    assert paths == {"additionalTruckPerHour", "emergencyPerHour"}


def test_service_rates_unset_by_default(monkeypatch):
    monkeypatch.setattr(settings, "PRICING_RATES_FILE", "")
    assert get_service_rates() is None


def test_service_rates_loaded_once(monkeypatch, tmp_path):
    path = tmp_path / "rates.json"
    path.write_text(json.dumps({"emergencyPerHour": 12}), encoding="utf-8")
    monkeypatch.setattr(settings, "PRICING_RATES_FILE", str(path))

    calls = []
    real_load = rates_loader.load_rates_file

    def counting_load(p):
        calls.append(p)
        return real_load(p)

    monkeypatch.setattr(rates_loader, "load_rates_file", counting_load)
    assert get_service_rates().emergency_hourly_per_mover == Decimal("12")
    assert get_service_rates().emergency_hourly_per_mover == Decimal("12")
    assert calls == [path]


def test_relative_rates_path_resolves_against_backend(monkeypatch):
    monkeypatch.setattr(settings, "PRICING_RATES_FILE", "config/rates.example.json")
    assert settings.rates_file_path() == EXAMPLE
