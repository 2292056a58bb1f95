"""Tests for rate limiting on the server tier routes."""

import pytest
from fastapi.testclient import TestClient

from employee_directory.core import rate_limit
from employee_directory.core.app_factory import create_server_app
from employee_directory.core.config import AppSettings, settings

BASE = "/api/v1/employees"


@pytest.fixture
def limited_client(monkeypatch, employee_service) -> TestClient:
    monkeypatch.setattr(settings.app, "rate_limit_enabled", True)
    monkeypatch.setattr(settings.app, "rate_limit_randomize", False)
    monkeypatch.setattr(settings.app, "rate_limit_requests", 3)
    monkeypatch.setattr(settings.app, "rate_limit_window_seconds", 60.0)
    monkeypatch.setattr(settings.app, "rate_limit_backoff_seconds", 30.0)
    monkeypatch.setattr(settings.app, "rate_limit_include_headers", True)
    return TestClient(create_server_app(employee_service))


def test_requests_over_the_limit_get_429(limited_client: TestClient) -> None:
    for _ in range(3):
        assert limited_client.get(BASE).status_code == 200

    response = limited_client.get(BASE)

    assert response.status_code == 429
    body = response.json()
    assert body["error"]["code"] == "rate_limit_exceeded"
    assert response.headers["Retry-After"] == "30"
    assert response.headers["X-RateLimit-Limit"] == "3"
    assert response.headers["X-RateLimit-Remaining"] == "0"


def test_all_employee_routes_share_one_budget(limited_client: TestClient) -> None:
    assert limited_client.get(BASE).status_code == 200
    assert limited_client.get(f"{BASE}/highestSalary").status_code == 200
    assert limited_client.get(f"{BASE}/search/john").status_code == 200

    assert limited_client.get(f"{BASE}/topTenHighestEarningEmployeeNames").status_code == 429
    assert limited_client.post(BASE, json={}).status_code == 429


def test_rejections_continue_during_backoff(limited_client: TestClient) -> None:
    for _ in range(3):
        limited_client.get(BASE)

    assert [limited_client.get(BASE).status_code for _ in range(5)] == [429] * 5


def test_health_is_never_limited(limited_client: TestClient) -> None:
    for _ in range(3):
        limited_client.get(BASE)

    assert limited_client.get(BASE).status_code == 429
    assert limited_client.get("/health").status_code == 200


def test_headers_can_be_disabled(monkeypatch, limited_client: TestClient) -> None:
    monkeypatch.setattr(settings.app, "rate_limit_include_headers", False)
    for _ in range(3):
        limited_client.get(BASE)

    response = limited_client.get(BASE)

    assert response.status_code == 429
    assert "Retry-After" not in response.headers


def test_disabled_limiter_admits_everything(employee_service) -> None:
    assert settings.app.rate_limit_enabled is False
    client = TestClient(create_server_app(employee_service))

    assert all(client.get(BASE).status_code == 200 for _ in range(30))


def test_limiter_rebuilt_when_configuration_changes(monkeypatch) -> None:
    monkeypatch.setattr(settings.app, "rate_limit_requests", 4)
    first = rate_limit.get_rate_limiter()
    assert rate_limit.get_rate_limiter() is first

    monkeypatch.setattr(settings.app, "rate_limit_requests", 5)
    second = rate_limit.get_rate_limiter()

    assert second is not first
    assert second.limit == 5


def test_randomized_limiter_stays_within_bounds() -> None:
    app_settings = AppSettings(
        rate_limit_randomize=True,
        rate_limit_requests_min=5,
        rate_limit_requests_max=10,
        rate_limit_backoff_min_seconds=30,
        rate_limit_backoff_max_seconds=90,
    )

    for _ in range(20):
        limiter = rate_limit.build_rate_limiter(app_settings)
        assert 5 <= limiter.limit <= 10
        assert 30 <= limiter.backoff_seconds <= 90
