"""
Concurrency tests for the booking capacity guarantee.

Launches more simultaneous create requests than a slot has places and checks
that exactly `capacity` of them succeed. Each request runs on its own thread
with its own connection, as it would under the API's worker threads.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.exceptions import CapacityExceededError
from models import Booking
from tests.helpers import at
from utils.booking_queries import count_active_bookings_for_slot


def _race(booking_service, users, resource_id, time_slot_id):
    """Fire one create per user at the same moment; return (successes, failures)."""
    barrier = threading.Barrier(len(users))

    def attempt(user_id):
        barrier.wait()
        try:
            return booking_service.create_booking(user_id, resource_id, time_slot_id)
        except CapacityExceededError as e:
            return e

    with ThreadPoolExecutor(max_workers=len(users)) as executor:
        results = list(executor.map(attempt, [u.id for u in users]))

    successes = [r for r in results if isinstance(r, Booking)]
    failures = [r for r in results if isinstance(r, CapacityExceededError)]
    return successes, failures


class TestConcurrentCapacity:
    """C+1 concurrent creates against a slot of capacity C."""

    @pytest.mark.parametrize("capacity", [1, 3])
    def test_exactly_capacity_bookings_succeed(
        self, capacity, database, booking_service, resource_service, time_slot_service, user_service
    ):
        resource = resource_service.create_resource(name="Hall", category="facility", capacity=capacity)
        slot = time_slot_service.create_time_slot(resource.id, at(9), at(10), capacity=capacity)
        users = [
            user_service.create_user(email=f"racer{i}@example.com", name=f"Racer {i}")
            for i in range(capacity + 1)
        ]

        successes, failures = _race(booking_service, users, resource.id, slot.id)

        assert len(successes) == capacity
        assert len(failures) == 1

        with database.session() as db:
            assert count_active_bookings_for_slot(db, slot.id) == capacity
        assert time_slot_service.get_time_slot(slot.id).is_available is False

    def test_cancel_and_create_race_never_overbooks(
        self, database, booking_service, user_service, court, court_slot
    ):
        """A cancel racing several creates admits at most one new booking."""
        holder = user_service.create_user(email="holder@example.com", name="Holder")
        held = booking_service.create_booking(holder.id, court.id, court_slot.id)
        contenders = [
            user_service.create_user(email=f"contender{i}@example.com", name=f"Contender {i}")
            for i in range(3)
        ]
        barrier = threading.Barrier(len(contenders) + 1)

        def cancel():
            barrier.wait()
            return booking_service.cancel_booking(held.id, holder.id)

        def create(user_id):
            barrier.wait()
            try:
                return booking_service.create_booking(user_id, court.id, court_slot.id)
            except CapacityExceededError as e:
                return e

        with ThreadPoolExecutor(max_workers=len(contenders) + 1) as executor:
            cancel_future = executor.submit(cancel)
            create_futures = [executor.submit(create, u.id) for u in contenders]
            cancel_future.result()
            results = [f.result() for f in create_futures]

        admitted = [r for r in results if isinstance(r, Booking)]
        assert len(admitted) <= 1

        with database.session() as db:
            assert count_active_bookings_for_slot(db, court_slot.id) <= 1
