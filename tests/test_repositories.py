"""
Tests para los repositorios de Supabase con un query builder falso.
"""

import pytest
from conftest import FakeSupabaseClient

from nido.database import BrowsingHistoryRepository, ListingRepository
from nido.models import ListingFilter, ViewedItem


def _names(query):
    return [name for name, _, _ in query.calls]


def _call(query, name):
    return [(args, kwargs) for n, args, kwargs in query.calls if n == name]


class TestListingRepository:
    """Tests para ListingRepository."""

    def test_search_builds_filtered_query(self):
        client = FakeSupabaseClient(rows=[{"id": "p1", "type": "Stan", "price": 100000}])
        repo = ListingRepository(client=client)
        listing_filter = ListingFilter(
            property_types=["Stan"],
            locations=["Split", "Zagreb"],
            min_price=88000,
            max_price=132000,
            min_area=52,
            max_area=78,
        )

        result = repo.search(listing_filter, limit=8)

        assert client.tables == ["properties"]
        assert _call(client.query, "in_") == [(("property_type", ["Stan"]), {})]
        assert _call(client.query, "or_") == [
            (("location.ilike.%Split%,location.ilike.%Zagreb%",), {})
        ]
        assert (("price", 88000), {}) in _call(client.query, "gte")
        assert (("area", 78), {}) in _call(client.query, "lte")
        # Sin dormitorios en el filtro no se consulta la columna
        assert all(args[0] != "bedrooms" for args, _ in _call(client.query, "gte"))
        assert result[0].id == "p1"
        assert result[0].property_type == "Stan"

    def test_search_without_type_or_location(self):
        client = FakeSupabaseClient()
        repo = ListingRepository(client=client)

        repo.search(ListingFilter(min_bedrooms=1, max_bedrooms=4), limit=3)

        assert "in_" not in _names(client.query)
        assert "or_" not in _names(client.query)
        assert (("bedrooms", 1), {}) in _call(client.query, "gte")
        assert _call(client.query, "limit") == [((3,), {})]

    def test_featured_query(self):
        client = FakeSupabaseClient(rows=[{"id": 7, "featured": True}])
        repo = ListingRepository(client=client)

        result = repo.get_featured(limit=4)

        assert _call(client.query, "eq") == [(("featured", True), {})]
        assert result[0].id == "7"
        assert result[0].featured

    def test_get_by_id_not_found(self):
        repo = ListingRepository(client=FakeSupabaseClient(rows=[]))

        assert repo.get_by_id("missing") is None


class TestBrowsingHistoryRepository:
    """Tests para BrowsingHistoryRepository."""

    def test_get_recent_orders_by_view_time(self):
        rows = [
            {"property_id": "p2", "price": 120000, "viewed_at": "2025-01-02T00:00:00"},
            {"property_id": "p1", "price": "n/a", "viewed_at": "2025-01-01T00:00:00"},
        ]
        client = FakeSupabaseClient(rows=rows)
        repo = BrowsingHistoryRepository(client=client)

        items = repo.get_recent("u1", limit=10)

        assert client.tables == ["user_browsing_history"]
        assert _call(client.query, "eq") == [(("user_id", "u1"), {})]
        assert _call(client.query, "order") == [(("viewed_at",), {"desc": True})]
        assert [i.property_id for i in items] == ["p2", "p1"]
        assert items[1].price is None

    def test_upsert_view(self):
        client = FakeSupabaseClient(rows=[{"id": "row"}])
        repo = BrowsingHistoryRepository(client=client)
        item = ViewedItem(property_id="p1", property_type="Stan", price=90000)

        row = repo.upsert_view("u1", item)

        (args, kwargs), = _call(client.query, "upsert")
        assert args[0]["user_id"] == "u1"
        assert args[0]["property_id"] == "p1"
        assert kwargs["on_conflict"] == "user_id,property_id"
        assert row == {"id": "row"}


class TestSupabaseClientRetry:
    """El wrapper re-lanza el error tras agotar los reintentos."""

    def test_execute_reraises(self, monkeypatch):
        from nido.database import SupabaseClient

        class Boom:
            def execute(self):
                raise RuntimeError("caído")

        client = SupabaseClient(client=None)
        # Sin esperas entre reintentos
        monkeypatch.setattr("time.sleep", lambda seconds: None)

        with pytest.raises(RuntimeError):
            client.execute(Boom())


class TestListingRowParsing:
    """Filas reales del catálogo con columnas de texto o datos rotos."""

    def test_textual_parking_is_accepted(self):
        rows = [{"id": 1, "price": 90000, "parking": "Garaža", "featured": True}]
        repo = ListingRepository(client=FakeSupabaseClient(rows=rows))

        result = repo.get_featured()

        assert len(result) == 1
        assert result[0].parking == "Garaža"

    def test_invalid_rows_are_skipped(self):
        rows = [
            {"id": 1, "price": 90000},
            {"price": "sin id"},
            {"id": 3, "bedrooms": "muchos"},
            {"id": 4, "area": 55},
        ]
        repo = ListingRepository(client=FakeSupabaseClient(rows=rows))

        result = repo.get_any()

        assert [listing.id for listing in result] == ["1", "4"]

    def test_get_by_id_with_invalid_row(self):
        repo = ListingRepository(client=FakeSupabaseClient(rows=[{"price": 1}]))

        assert repo.get_by_id("x") is None

    def test_numeric_parking_becomes_text(self):
        from nido.models import ListingRecord

        assert ListingRecord.from_record({"id": 1, "parking": 2}).parking == "2"
        assert ListingRecord.from_record("no es un dict") is None
