"""Unit tests for the listing OrderingPolicy."""
from datetime import datetime, timedelta, timezone

from classifieds.domain.entities.listing import Listing
from classifieds.domain.enums.ordering_context import OrderingContext
from classifieds.domain.ordering.ordering_policy import OrderingPolicy

_BASE = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _make_listing(
    listing_id: int,
    *,
    days: int = 0,
    homepage_position: int | None = None,
    category_position: int | None = None,
) -> Listing:
    return Listing(
        id=listing_id,
        slug=f"listing-{listing_id}",
        title=f"Listing {listing_id}",
        created_at=_BASE + timedelta(days=days),
        homepage_position=homepage_position,
        category_position=category_position,
    )


def _ids(listings: list[Listing]) -> list[int]:
    return [listing.id for listing in listings]


class TestHomepageOrdering:
    def test_positioned_before_unpositioned(self) -> None:
        x = _make_listing(1, homepage_position=2)
        y = _make_listing(2, homepage_position=1)
        z = _make_listing(3, days=10)

        ordered = OrderingPolicy().order([x, y, z], OrderingContext.HOMEPAGE)

        assert ordered == [y, x, z]

    def test_unpositioned_newest_first(self) -> None:
        older = _make_listing(1, days=1)
        newer = _make_listing(2, days=5)

        ordered = OrderingPolicy().order_for_homepage([older, newer])

        assert _ids(ordered) == [2, 1]

    def test_explicit_position_beats_newer_timestamp(self) -> None:
        positioned_old = _make_listing(1, days=-100, homepage_position=50)
        unpositioned_new = _make_listing(2, days=100)

        ordered = OrderingPolicy().order_for_homepage([unpositioned_new, positioned_old])

        assert _ids(ordered) == [1, 2]

    def test_position_zero_counts_as_explicit(self) -> None:
        zero = _make_listing(1, homepage_position=0)
        unpositioned = _make_listing(2, days=30)

        ordered = OrderingPolicy().order_for_homepage([unpositioned, zero])

        assert _ids(ordered) == [1, 2]

    def test_ignores_category_position(self) -> None:
        a = _make_listing(1, days=1, category_position=1)
        b = _make_listing(2, days=2)

        ordered = OrderingPolicy().order_for_homepage([a, b])

        assert _ids(ordered) == [2, 1]


class TestCategoryOrdering:
    def test_positioned_then_oldest_first(self) -> None:
        x = _make_listing(1, category_position=2)
        y = _make_listing(2, category_position=1)
        z = _make_listing(3, days=-3)
        w = _make_listing(4, days=3)

        ordered = OrderingPolicy().order([w, x, z, y], OrderingContext.CATEGORY)

        assert ordered == [y, x, z, w]

    def test_ignores_homepage_position(self) -> None:
        a = _make_listing(1, days=2, homepage_position=1)
        b = _make_listing(2, days=1)

        ordered = OrderingPolicy().order_for_category([a, b])

        assert _ids(ordered) == [2, 1]


class TestStabilityAndPurity:
    def test_equal_positions_keep_incoming_order(self) -> None:
        first = _make_listing(1, days=1, homepage_position=3)
        second = _make_listing(2, days=9, homepage_position=3)

        ordered = OrderingPolicy().order_for_homepage([first, second])

        assert _ids(ordered) == [1, 2]

    def test_equal_timestamps_keep_incoming_order(self) -> None:
        listings = [_make_listing(i) for i in (5, 3, 4)]

        assert _ids(OrderingPolicy().order_for_homepage(listings)) == [5, 3, 4]
        assert _ids(OrderingPolicy().order_for_category(listings)) == [5, 3, 4]

    def test_does_not_mutate_input(self) -> None:
        listings = [_make_listing(1, days=1), _make_listing(2, days=2, homepage_position=1)]
        snapshot = list(listings)

        OrderingPolicy().order_for_homepage(listings)

        assert listings == snapshot

    def test_idempotent(self) -> None:
        listings = [
            _make_listing(1, days=4),
            _make_listing(2, homepage_position=7),
            _make_listing(3, days=-2),
            _make_listing(4, homepage_position=1),
        ]
        policy = OrderingPolicy()

        once = policy.order_for_homepage(listings)
        twice = policy.order_for_homepage(listings)

        assert once == twice
        assert policy.order_for_homepage(once) == once

    def test_accepts_any_iterable(self) -> None:
        listings = (_make_listing(i, days=i) for i in range(3))

        assert _ids(OrderingPolicy().order_for_category(listings)) == [0, 1, 2]

    def test_empty_collection(self) -> None:
        assert OrderingPolicy().order_for_homepage([]) == []
