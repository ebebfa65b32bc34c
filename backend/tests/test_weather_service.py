import asyncio
from datetime import date

import httpx
import pytest

from tripcraft.services.weather import (
    WeatherProviderError,
    get_daily_forecast,
    parse_forecast_days,
)


def _forecast_payload():
    return {
        "location": {"name": "Lisbon"},
        "forecast": {
            "forecastday": [
                {
                    "date": "2025-09-15",
                    "day": {
                        "avgtemp_c": 22.4,
                        "totalprecip_mm": 0.0,
                        "maxwind_kph": 11.2,
                        "avghumidity": 55,
                        "uv": 6.0,
                        "condition": {"text": "Sunny"},
                    },
                },
                {
                    "date": "2025-09-16",
                    "day": {
                        "avgtemp_c": 19.0,
                        "condition": {"text": "Cloudy"},
                    },
                },
                {
                    "date": "2025-09-17",
                    "day": {
                        "avgtemp_c": 18.5,
                        "totalprecip_mm": None,
                        "maxwind_kph": None,
                        "avghumidity": None,
                        "uv": None,
                        "condition": {"text": "Patchy rain possible"},
                    },
                },
            ]
        },
    }


def test_parse_forecast_days_maps_provider_fields():
    days = parse_forecast_days(_forecast_payload())

    assert [d.date for d in days] == [date(2025, 9, 15), date(2025, 9, 16), date(2025, 9, 17)]

    first = days[0]
    assert first.average_temperature_c == 22.4
    assert first.total_precipitation_mm == 0.0
    assert first.max_wind_speed_kph == 11.2
    assert first.average_humidity_percent == 55
    assert first.uv_index == 6.0
    assert first.condition_text == "Sunny"


@pytest.mark.parametrize("index", [1, 2])
def test_missing_or_null_fields_get_defaults(index):
    d = parse_forecast_days(_forecast_payload())[index]

    assert d.total_precipitation_mm == 0
    assert d.max_wind_speed_kph == 0
    assert d.average_humidity_percent == 50
    assert d.uv_index == 5


@pytest.mark.parametrize(
    "bad_day",
    [
        {"date": "not-a-date", "day": {"avgtemp_c": 20}},
        {"date": "2025-09-16", "day": {"condition": {"text": "Sunny"}}},
        {"day": {"avgtemp_c": 20}},
        {"date": "2025-09-16", "day": {"avgtemp_c": 20, "avghumidity": 140}},
        {"date": "2025-09-16", "day": {"avgtemp_c": "nan"}},
        {"date": "2025-09-16", "day": {"avgtemp_c": float("inf")}},
        {"date": "2025-09-16", "day": {"avgtemp_c": 20, "totalprecip_mm": float("nan")}},
        "garbage",
    ],
)
def test_forecast_stops_at_first_unusable_day(bad_day):
    payload = _forecast_payload()
    payload["forecast"]["forecastday"][1] = bad_day

    days = parse_forecast_days(payload)

    # Day 3 is fine but would leave a gap after day 1.
    assert [d.date for d in days] == [date(2025, 9, 15)]


def test_unusable_trailing_days_keep_the_rest():
    payload = _forecast_payload()
    payload["forecast"]["forecastday"].append({"date": "2025-09-18", "day": {"avgtemp_c": "nan"}})

    assert len(parse_forecast_days(payload)) == 3


@pytest.mark.parametrize("payload", [[], ["forecast"], "oops", {"forecast": []}])
def test_non_object_payloads_are_errors(payload):
    with pytest.raises(WeatherProviderError):
        parse_forecast_days(payload)


def test_payload_without_forecast_block_is_an_error():
    with pytest.raises(WeatherProviderError):
        parse_forecast_days({"error": {"code": 1006, "message": "No matching location found."}})


def test_missing_api_key_fails_before_any_request(monkeypatch):
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)

    def handler(request):
        raise AssertionError("should not hit the network")

    with pytest.raises(WeatherProviderError, match="WEATHER_API_KEY"):
        asyncio.run(get_daily_forecast("Lisbon", 7, transport=httpx.MockTransport(handler)))


def test_get_daily_forecast_sends_clamped_request(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json=_forecast_payload())

    days = asyncio.run(get_daily_forecast("Lisbon", 30, transport=httpx.MockTransport(handler)))

    assert len(days) == 3
    assert seen["params"]["key"] == "test-key"
    assert seen["params"]["q"] == "Lisbon"
    assert seen["params"]["days"] == "14"


def test_rejected_key_is_reported(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "bad-key")

    def handler(request):
        return httpx.Response(401, json={"error": {"code": 2006, "message": "API key is invalid."}})

    with pytest.raises(WeatherProviderError, match="401"):
        asyncio.run(get_daily_forecast("Lisbon", 7, transport=httpx.MockTransport(handler)))


def test_server_and_network_errors_are_wrapped(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")

    def server_error(request):
        return httpx.Response(503, text="unavailable")

    def network_down(request):
        raise httpx.ConnectError("connection refused", request=request)

    for handler in (server_error, network_down):
        with pytest.raises(WeatherProviderError):
            asyncio.run(get_daily_forecast("Lisbon", 7, transport=httpx.MockTransport(handler)))


def test_non_json_body_is_wrapped(monkeypatch):
    monkeypatch.setenv("WEATHER_API_KEY", "test-key")

    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(WeatherProviderError):
        asyncio.run(get_daily_forecast("Lisbon", 7, transport=httpx.MockTransport(handler)))
