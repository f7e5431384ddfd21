"""
Integration tests for QueryService read-only lookups.
"""

import uuid

import pytest

from core.exceptions import NotFoundError, ValidationError
from tests.helpers import at


class TestBookingQueries:
    """Test booking lookups."""

    def test_user_without_bookings_gets_empty_list(self, query_service, user):
        assert query_service.list_user_bookings(user.id) == []

    def test_unknown_user_gets_empty_list(self, query_service):
        assert query_service.list_user_bookings(uuid.uuid4()) == []

    def test_bookings_newest_first(self, query_service, booking_service, time_slot_service, user, court):
        first_slot = time_slot_service.create_time_slot(court.id, at(9), at(10))
        second_slot = time_slot_service.create_time_slot(court.id, at(11), at(12))
        first = booking_service.create_booking(user.id, court.id, first_slot.id)
        second = booking_service.create_booking(user.id, court.id, second_slot.id)

        bookings = query_service.list_user_bookings(user.id)

        assert [b.id for b in bookings] == [second.id, first.id]

    def test_cancelled_bookings_are_listed(self, query_service, booking_service, user, court, court_slot):
        booking = booking_service.create_booking(user.id, court.id, court_slot.id)
        booking_service.cancel_booking(booking.id, user.id)

        bookings = query_service.list_user_bookings(user.id)

        assert [b.status for b in bookings] == ["cancelled"]

    def test_only_own_bookings_are_listed(self, query_service, booking_service, user, other_user, court, court_slot):
        booking_service.create_booking(user.id, court.id, court_slot.id)
        assert query_service.list_user_bookings(other_user.id) == []

    def test_get_booking(self, query_service, booking_service, user, court, court_slot):
        booking = booking_service.create_booking(user.id, court.id, court_slot.id)
        assert query_service.get_booking(booking.id).id == booking.id

    def test_get_unknown_booking(self, query_service):
        with pytest.raises(NotFoundError):
            query_service.get_booking(uuid.uuid4())


class TestResourceQueries:
    """Test resource lookups."""

    def test_list_all_resources_newest_first(self, query_service, resource_service):
        first = resource_service.create_resource(name="Dr. Smith", category="doctor")
        second = resource_service.create_resource(name="Court B", category="court")

        resources = query_service.list_resources()

        assert [r.id for r in resources] == [second.id, first.id]

    def test_filter_by_category_sorted_by_name(self, query_service, resource_service):
        resource_service.create_resource(name="Dr. Smith", category="doctor")
        resource_service.create_resource(name="Court B", category="court")
        resource_service.create_resource(name="Court A", category="court")

        resources = query_service.list_resources(category="court")

        assert [r.name for r in resources] == ["Court A", "Court B"]

    def test_empty_category(self, query_service, resource_service):
        resource_service.create_resource(name="Court A", category="court")
        assert query_service.list_resources(category="facility") == []

    def test_unknown_category_is_rejected(self, query_service):
        with pytest.raises(ValidationError):
            query_service.list_resources(category="spaceship")

    def test_get_resource(self, query_service, court):
        assert query_service.get_resource(court.id).name == "Court A"

    def test_get_unknown_resource(self, query_service):
        with pytest.raises(NotFoundError):
            query_service.get_resource(uuid.uuid4())

    def test_list_resource_time_slots_includes_closed(self, query_service, time_slot_service, court):
        open_slot = time_slot_service.create_time_slot(court.id, at(12), at(13))
        closed_slot = time_slot_service.create_time_slot(court.id, at(8), at(9))
        time_slot_service.set_availability(closed_slot.id, False)

        slots = query_service.list_resource_time_slots(court.id)

        assert [s.id for s in slots] == [closed_slot.id, open_slot.id]
