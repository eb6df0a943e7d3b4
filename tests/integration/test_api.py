"""
Integration tests for the API layer.

Routes run against an InMemoryContentStore installed through
``app.dependency_overrides``, so no content API needs to be running.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from classifieds.api.dependencies import get_content_api_client, get_content_store
from classifieds.api.main import app
from classifieds.application.interfaces.content_store import ContentStoreError
from classifieds.domain.entities.listing import Category, City, Listing, Tag
from classifieds.domain.enums.listing_status import ListingStatus
from classifieds.infrastructure.in_memory.in_memory_content_store import InMemoryContentStore

_BASE = datetime(2024, 6, 1, tzinfo=timezone.utc)
OSLO = City(id=1, name="Oslo", slug="oslo")
BERGEN = City(id=2, name="Bergen", slug="bergen")
BIKES = Category(id=1, name="Bikes", slug="bikes")
CARS = Category(id=2, name="Cars", slug="cars")
VINTAGE = Tag(id=1, name="Vintage", slug="vintage")


def _make_listing(listing_id: int, **overrides) -> Listing:  # type: ignore[no-untyped-def]
    defaults = dict(
        id=listing_id,
        slug=f"listing-{listing_id}",
        title=f"Listing {listing_id}",
        city=OSLO,
        category=BIKES,
        status=ListingStatus.ACTIVE,
        created_at=_BASE + timedelta(hours=listing_id),
    )
    defaults.update(overrides)
    return Listing(**defaults)


def _make_store(*extra: Listing) -> InMemoryContentStore:
    listings = [
        _make_listing(1, slug="acme", featured=True, price=Decimal("150.00"), tags=(VINTAGE,)),
        _make_listing(2, featured=True, city=BERGEN, homepage_position=1),
        _make_listing(3, category=CARS, category_position=2),
        _make_listing(4, category_position=1, owner_id=9),
        *extra,
    ]
    return InMemoryContentStore(
        listings, cities=[OSLO, BERGEN], categories=[BIKES, CARS], tags=[VINTAGE]
    )


def _ids(body_listings: list[dict]) -> list[int]:  # type: ignore[type-arg]
    return [listing["id"] for listing in body_listings]


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def store() -> InMemoryContentStore:
    store = _make_store()
    app.dependency_overrides[get_content_store] = lambda: store
    return store


class TestListListings:
    def test_returns_newest_first_with_pagination(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings", params={"page_size": 3})

        assert response.status_code == 200
        body = response.json()
        assert _ids(body["listings"]) == [4, 3, 2]
        assert body["pagination"] == {
            "page": 1,
            "page_size": 3,
            "total": 4,
            "page_count": 2,
            "has_next": True,
            "has_previous": False,
        }

    def test_filters_combine(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get(
            "/listings", params={"city": "oslo", "featured": "true", "status": "active"}
        )

        assert _ids(response.json()["listings"]) == [1]

    def test_tag_filter(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings", params=[("tags", "vintage"), ("tags", "rare")])

        listing = response.json()["listings"][0]
        assert listing["slug"] == "acme"
        assert listing["tags"] == [{"id": 1, "name": "Vintage", "slug": "vintage"}]

    def test_out_of_range_paging_is_clamped(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings", params={"page": 0, "page_size": 0})

        pagination = response.json()["pagination"]
        assert pagination["page"] == 1
        assert pagination["page_size"] == 1

    def test_page_past_end_is_empty(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings", params={"page": 50})

        assert response.status_code == 200
        assert response.json()["listings"] == []

    def test_explicit_sort(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings", params={"sort": "title:asc"})

        assert _ids(response.json()["listings"]) == [1, 2, 3, 4]

    def test_sort_without_field_is_rejected(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/listings", params={"sort": ":asc"}).status_code == 422
        assert client.get("/listings", params={"sort": "title:sideways"}).status_code == 422

    def test_owner_listings(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings/owner/9")

        assert _ids(response.json()["listings"]) == [4]

    def test_store_failure_is_bad_gateway(self, client: TestClient) -> None:
        failing = MagicMock()
        failing.find_listings = AsyncMock(side_effect=ContentStoreError("down", status_code=503))
        app.dependency_overrides[get_content_store] = lambda: failing

        response = client.get("/listings")

        assert response.status_code == 502
        assert response.json()["upstream_status"] == 503


class TestFeaturedAndHomepage:
    def test_featured_scoped_to_city(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings/featured", params={"city": "bergen"})

        body = response.json()
        assert _ids(body["listings"]) == [2]
        assert body["city"] == "bergen"
        assert body["fell_back"] is False

    def test_homepage_orders_positioned_first(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings/homepage")

        body = response.json()
        assert _ids(body["latest"]) == [2, 4, 3, 1]
        assert sorted(_ids(body["featured"])) == [1, 2]
        assert [c["slug"] for c in body["cities"]] == ["bergen", "oslo"]
        assert body["errors"] == {}

    def test_category_page_orders_by_category_position(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings/category/bikes")

        assert _ids(response.json()["listings"]) == [4, 1, 2]


class TestSingleListing:
    def test_by_slug(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings/slug/acme")

        assert response.status_code == 200
        assert response.json()["price"] == "150.00"

    def test_by_slug_missing(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/listings/slug/nope").status_code == 404

    def test_by_slug_ambiguous(self, client: TestClient) -> None:
        duplicated = _make_store(_make_listing(5, slug="acme"))
        app.dependency_overrides[get_content_store] = lambda: duplicated

        assert client.get("/listings/slug/acme").status_code == 409

    def test_by_id(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/listings/3").json()["slug"] == "listing-3"
        assert client.get("/listings/99").status_code == 404

    def test_route_resolves(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/listings/route/oslo/bikes/acme")

        body = response.json()
        assert body["listing"]["id"] == 1
        assert body["city"]["slug"] == "oslo"
        assert body["category"]["slug"] == "bikes"

    def test_route_under_wrong_city_is_not_found(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/listings/route/bergen/bikes/acme").status_code == 404

    def test_route_unknown_category_is_not_found(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/listings/route/oslo/boats/acme").status_code == 404


class TestTaxonomy:
    def test_cities_sorted_by_name(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert [c["name"] for c in client.get("/cities").json()] == ["Bergen", "Oslo"]

    def test_category_by_slug(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/categories/cars").json()["id"] == 2
        assert client.get("/categories/boats").status_code == 404

    def test_tags(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.get("/tags").json() == [{"id": 1, "name": "Vintage", "slug": "vintage"}]


class TestAdminCuration:
    def test_homepage_working_set(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/admin/curation/homepage")

        body = response.json()
        assert body["context"] == "homepage"
        assert body["total"] == 4
        assert _ids(body["listings"])[0] == 2

    def test_category_working_set(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.get("/admin/curation/categories/bikes")

        body = response.json()
        assert body["context"] == "category"
        assert _ids(body["listings"]) == [4, 2, 1]

    def test_position_update_is_partial(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.patch("/admin/listings/4/position", json={"homepage_position": 7})

        assert response.status_code == 200
        body = response.json()
        assert body["homepage_position"] == 7
        assert body["category_position"] == 1
        assert body["title"] == "Listing 4"

    def test_null_clears_position(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.patch("/admin/listings/2/position", json={"homepage_position": None})

        assert response.json()["homepage_position"] is None

    def test_empty_body_is_rejected(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.patch("/admin/listings/2/position", json={}).status_code == 422

    def test_unknown_listing(self, client: TestClient, store: InMemoryContentStore) -> None:
        response = client.patch("/admin/listings/99/position", json={"category_position": 1})

        assert response.status_code == 404


class TestPublishing:
    _FORM = {
        "title": "New bike",
        "slug": "new-bike",
        "price": "99.50",
        "city_id": "1",
        "category_id": "1",
        "tag_ids": ["1"],
    }

    def _publish(self, client: TestClient) -> dict:  # type: ignore[type-arg]
        response = client.post(
            "/listings", data=self._FORM, files=[("images", ("a.jpg", b"jpeg", "image/jpeg"))]
        )
        assert response.status_code == 201
        return response.json()

    def test_publish_with_image(self, client: TestClient, store: InMemoryContentStore) -> None:
        body = self._publish(client)

        assert body["price"] == "99.50"
        assert body["city"]["slug"] == "oslo"
        assert body["category"]["slug"] == "bikes"
        assert [tag["slug"] for tag in body["tags"]] == ["vintage"]
        assert len(body["images"]) == 1
        assert body["images"][0]["url"].endswith("a.jpg")
        assert client.get("/listings/slug/new-bike").json()["id"] == body["id"]

    def test_missing_title_is_rejected(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.post("/listings", data={"slug": "untitled"}).status_code == 422

    def test_revise_without_images_keeps_them(self, client: TestClient, store: InMemoryContentStore) -> None:
        published = self._publish(client)

        response = client.put(
            f"/listings/{published['id']}", data={**self._FORM, "title": "Renamed bike"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Renamed bike"
        assert body["images"] == published["images"]

    def test_revise_unknown_listing(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.put("/listings/99", data=self._FORM).status_code == 404

    def test_withdraw(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.delete("/listings/3").status_code == 204
        assert client.get("/listings/3").status_code == 404

    def test_withdraw_unknown_listing(self, client: TestClient, store: InMemoryContentStore) -> None:
        assert client.delete("/listings/99").status_code == 404


class TestHealth:
    def test_connected(self, client: TestClient) -> None:
        content_api = MagicMock()
        content_api.get = AsyncMock(return_value={"data": []})
        app.dependency_overrides[get_content_api_client] = lambda: content_api

        response = client.get("/health")

        assert response.json() == {"status": "healthy", "content_api": "connected"}

    def test_degraded(self, client: TestClient) -> None:
        content_api = MagicMock()
        content_api.get = AsyncMock(side_effect=ContentStoreError("refused"))
        app.dependency_overrides[get_content_api_client] = lambda: content_api

        body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["content_api"].startswith("error:")
