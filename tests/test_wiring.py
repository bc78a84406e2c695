"""Tests de armado: factories y scripts sobre un cliente Supabase falso."""

import importlib
import json

import pytest
from conftest import FakeSupabaseClient

from nido.config import Settings, get_settings
from nido.database import ListingRepository
from nido.models import ViewedItem
from nido.recommendations import build_history_tracker, build_recommendation_service

FEATURED_ROW = {"id": 1, "price": 90000, "parking": "Garaža", "featured": True}


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://demo.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon")
    monkeypatch.setenv("RECOMMENDATION_LIMIT", "3")
    monkeypatch.setenv("FALLBACK_MIN_RATIO", "0.25")
    monkeypatch.setenv("HISTORY_COOKIE_NAME", "historial")
    monkeypatch.setenv("HISTORY_COOKIE_LIMIT", "5")
    monkeypatch.setenv("HISTORY_COOKIE_MAX_AGE_DAYS", "1")
    get_settings.cache_clear()
    yield Settings(_env_file=None)
    get_settings.cache_clear()


class TestBuildHistoryTracker:
    """El tracker toma los parámetros de la cookie de Settings."""

    def test_cookie_settings(self, settings):
        tracker = build_history_tracker(settings, client=FakeSupabaseClient())

        assert tracker.cookie_cap == 5
        assert tracker.cookie_name == "historial"
        assert tracker.cookie_max_age == 24 * 60 * 60

    def test_signed_in_view_goes_to_supabase(self, settings):
        client = FakeSupabaseClient()
        tracker = build_history_tracker(settings, client=client)

        result = tracker.track_view("p1", {"price": 90000}, user_id="u1")

        assert result.success
        assert client.tables == ["user_browsing_history"]
        assert any(name == "upsert" for name, _, _ in client.query.calls)


class TestBuildRecommendationService:
    """El servicio toma límites de Settings y consulta el catálogo."""

    def test_limits_from_settings(self, settings):
        service = build_recommendation_service(settings, client=FakeSupabaseClient())

        assert service.limit == 3
        assert service.fallback_min_ratio == 0.25

    def test_featured_results(self, settings):
        client = FakeSupabaseClient(rows=[FEATURED_ROW])
        service = build_recommendation_service(settings, client=client)

        result = service.get_recommendations()

        assert [listing.id for listing in result] == ["1"]
        assert "properties" in client.tables


class TestScripts:
    """Los scripts corren de punta a punta con repositorios falsos."""

    def test_run_recommendations_from_file(self, settings, monkeypatch, tmp_path):
        module = importlib.import_module("nido.scripts.run_recommendations")
        client = FakeSupabaseClient(rows=[FEATURED_ROW])
        monkeypatch.setattr(
            module,
            "build_recommendation_service",
            lambda s: build_recommendation_service(s, client=client),
        )
        history_file = tmp_path / "history.json"
        history_file.write_text(
            json.dumps([ViewedItem(property_type="Stan", location="Zagreb").model_dump()]),
            encoding="utf-8",
        )

        listings = module.run_recommendations(history_file=str(history_file))

        assert [listing["id"] for listing in listings] == ["1"]
        assert listings[0]["parking"] == "Garaža"

    def test_run_comparison(self, settings, monkeypatch, capsys):
        module = importlib.import_module("nido.scripts.run_comparison")
        client = FakeSupabaseClient(rows=[FEATURED_ROW])
        monkeypatch.setattr(module, "ListingRepository", lambda: ListingRepository(client=client))

        assert module.run_comparison("1", "1") == 0
        assert '"price"' in capsys.readouterr().out

    def test_run_comparison_missing_listing(self, settings, monkeypatch):
        module = importlib.import_module("nido.scripts.run_comparison")
        client = FakeSupabaseClient(rows=[])
        monkeypatch.setattr(module, "ListingRepository", lambda: ListingRepository(client=client))

        assert module.run_comparison("1", "2") == 1
