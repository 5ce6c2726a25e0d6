"""Pytest fixtures and configuration for CronFlow tests."""

import pytest
from datetime import datetime
from fastapi.testclient import TestClient

from cronflow.grammar.compiler import compile_grammar
from cronflow.recurrence.interpret import HybridTranslator


@pytest.fixture
def fixed_now():
    """Reference instant: Monday 2024-01-01 10:00:00."""
    return datetime(2024, 1, 1, 10, 0, 0)


@pytest.fixture
def translator():
    """Fresh translator (no last_source yet)."""
    return HybridTranslator()


@pytest.fixture
def weekday_morning_spec():
    """Compiled '30 9 * * 1-5' (09:30 Monday to Friday)."""
    return compile_grammar("30 9 * * 1-5")


@pytest.fixture
def no_dateparser(monkeypatch):
    """Make the natural-date tier find nothing, so extraction is purely regex driven."""
    monkeypatch.setattr("cronflow.recurrence.extractor.search_dates", lambda *args, **kwargs: None)


@pytest.fixture
def test_client(fixed_now):
    """Create a FastAPI test client with the clock pinned to `fixed_now`."""
    from cronflow.api.app import app, get_now

    def override_get_now():
        return fixed_now

    app.dependency_overrides[get_now] = override_get_now

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
