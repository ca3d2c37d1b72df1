"""Tests for the rate user use case."""

import random
from datetime import timedelta

from src.adapters.rating_store import InMemoryRatingStore
from src.use_cases.rate_user import rate_user_use_case
from tests.conftest import FrozenClock


def test_first_request_creates_fresh_rating(
    store: InMemoryRatingStore, clock: FrozenClock
) -> None:
    result = rate_user_use_case(store=store, user_id="U1", now=clock())

    assert result.is_fresh is True
    assert result.remaining is None
    assert result.rating == store.get_rating("U1")
    assert result.rating.created_at == clock.now


def test_second_request_within_hour_is_cached(
    store: InMemoryRatingStore, clock: FrozenClock
) -> None:
    """Repeated requests inside the cooldown keep the value and count down."""
    first = rate_user_use_case(store=store, user_id="U1", now=clock())

    clock.advance(timedelta(minutes=5))
    second = rate_user_use_case(store=store, user_id="U1", now=clock())
    clock.advance(timedelta(minutes=10))
    third = rate_user_use_case(store=store, user_id="U1", now=clock())

    assert second.is_fresh is False
    assert third.is_fresh is False
    assert second.rating == first.rating
    assert third.rating == first.rating
    assert second.remaining == timedelta(minutes=55)
    assert third.remaining == timedelta(minutes=45)
    assert third.remaining < second.remaining


def test_request_just_before_cooldown_end_is_cached(
    store: InMemoryRatingStore, clock: FrozenClock
) -> None:
    rate_user_use_case(store=store, user_id="U1", now=clock())

    clock.advance(timedelta(hours=1) - timedelta(milliseconds=1))
    result = rate_user_use_case(store=store, user_id="U1", now=clock())

    assert result.is_fresh is False
    assert result.remaining == timedelta(milliseconds=1)


def test_request_after_cooldown_creates_new_rating(clock: FrozenClock) -> None:
    """Once an hour has elapsed a new rating is drawn and stamped."""
    store = InMemoryRatingStore(clock=clock, rng=random.Random(3))
    first = rate_user_use_case(store=store, user_id="U1", now=clock())

    clock.advance(timedelta(hours=1))
    second = rate_user_use_case(store=store, user_id="U1", now=clock())

    assert second.is_fresh is True
    assert second.rating.created_at == clock.now
    assert second.rating.created_at > first.rating.created_at
    assert store.get_rating("U1") == second.rating


def test_reset_makes_next_request_fresh(
    store: InMemoryRatingStore, clock: FrozenClock
) -> None:
    rate_user_use_case(store=store, user_id="U1", now=clock())
    store.reset()

    clock.advance(timedelta(minutes=1))
    result = rate_user_use_case(store=store, user_id="U1", now=clock())

    assert result.is_fresh is True


def test_cooldown_is_per_user(store: InMemoryRatingStore, clock: FrozenClock) -> None:
    rate_user_use_case(store=store, user_id="U1", now=clock())

    result = rate_user_use_case(store=store, user_id="U2", now=clock())

    assert result.is_fresh is True
    assert len(store) == 2


def test_custom_cooldown(store: InMemoryRatingStore, clock: FrozenClock) -> None:
    rate_user_use_case(store=store, user_id="U1", now=clock())

    clock.advance(timedelta(minutes=10))
    result = rate_user_use_case(
        store=store, user_id="U1", now=clock(), cooldown=timedelta(minutes=10)
    )

    assert result.is_fresh is True
