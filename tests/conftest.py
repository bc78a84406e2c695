"""
Fixtures compartidas: propiedades de ejemplo y repositorios en memoria.
"""

from types import SimpleNamespace

import pytest

from nido.models import ListingRecord, ViewedItem


def make_listing(listing_id: str, **kwargs) -> ListingRecord:
    data = {
        "id": listing_id,
        "price": 150000,
        "area": 70,
        "bedrooms": 2,
        "bathrooms": 1,
        "property_type": "Stan",
        "location": "Zagreb, Centar",
    }
    if "type" in kwargs:
        data.pop("property_type")
    data.update(kwargs)
    return ListingRecord.model_validate(data)


class FakeListingRepository:
    """Catálogo en memoria que evalúa ListingFilter como lo haría Supabase."""

    def __init__(self, listings=None, fail_on=()):
        self.listings = list(listings or [])
        self.fail_on = set(fail_on)
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} falló")

    def search(self, listing_filter, limit=8):
        self._check("search")
        self.last_filter = listing_filter
        return [item for item in self.listings if listing_filter.matches(item)][:limit]

    def get_featured(self, limit=8):
        self._check("get_featured")
        return [item for item in self.listings if item.featured][:limit]

    def get_any(self, limit=8):
        self._check("get_any")
        return self.listings[:limit]


class FakeHistoryRepository:
    """Historial en memoria por usuario."""

    def __init__(self, history=None, fail=False):
        self.history = history or {}
        self.fail = fail
        self.upserts = []

    def get_recent(self, user_id, limit=10):
        if self.fail:
            raise RuntimeError("historial no disponible")
        return self.history.get(user_id, [])[:limit]

    def upsert_view(self, user_id, item):
        if self.fail:
            raise RuntimeError("historial no disponible")
        self.upserts.append((user_id, item))
        return item.to_db_dict(user_id)


class FakeQuery:
    """Imita el query builder de PostgREST registrando cada llamada."""

    def __init__(self, rows=None):
        self.rows = rows or []
        self.calls = []

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def execute(self):
        return SimpleNamespace(data=self.rows)


class FakeSupabaseClient:
    """Reemplaza a SupabaseClient: una FakeQuery por tabla."""

    def __init__(self, rows=None):
        self.query = FakeQuery(rows)
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self.query

    def execute(self, query):
        return query.execute().data


@pytest.fixture
def zagreb_history():
    return [
        ViewedItem(
            property_type="Stan",
            location="Zagreb, Centar",
            price=100000,
            area=60,
            bedrooms=2,
        ),
        ViewedItem(
            property_type="Stan",
            location="Zagreb, Trešnjevka",
            price=120000,
            area=70,
            bedrooms=3,
        ),
    ]


@pytest.fixture
def catalog():
    return [
        make_listing("z1", price=105000, area=62, bedrooms=2),
        make_listing("z2", price=115000, area=66, bedrooms=3, location="Zagreb, Maksimir"),
        make_listing("z3", price=125000, area=75, bedrooms=3, location="Zagreb, Trešnjevka"),
        make_listing("z4", price=98000, area=55, bedrooms=1),
        make_listing("s1", price=110000, area=65, bedrooms=2, location="Split, Bačvice"),
        make_listing("k1", price=400000, area=180, bedrooms=5, property_type="Kuća", featured=True),
        make_listing("k2", price=350000, area=150, bedrooms=4, property_type="Kuća", featured=True),
    ]
