"""Application constants and configuration values."""

# Database field lengths
MAX_STRING_LENGTH = 255
MAX_NOTES_LENGTH = 1000

# Resource categories
RESOURCE_CATEGORY_DOCTOR = "doctor"
RESOURCE_CATEGORY_COURT = "court"
RESOURCE_CATEGORY_FACILITY = "facility"
RESOURCE_CATEGORIES = (
    RESOURCE_CATEGORY_DOCTOR,
    RESOURCE_CATEGORY_COURT,
    RESOURCE_CATEGORY_FACILITY,
)

# Booking statuses
BOOKING_STATUS_PENDING = "pending"
BOOKING_STATUS_CONFIRMED = "confirmed"
BOOKING_STATUS_CANCELLED = "cancelled"
BOOKING_STATUSES = (
    BOOKING_STATUS_PENDING,
    BOOKING_STATUS_CONFIRMED,
    BOOKING_STATUS_CANCELLED,
)

# Bookings in these statuses count against slot capacity and take part in
# conflict detection. Cancelled bookings are inert.
ACTIVE_BOOKING_STATUSES = (BOOKING_STATUS_PENDING, BOOKING_STATUS_CONFIRMED)

# User roles
USER_ROLES = ("admin", "provider", "customer")
DEFAULT_USER_ROLE = "customer"

# Header carrying the caller identity resolved by the upstream auth layer
USER_ID_HEADER = "X-User-ID"

SERVICE_NAME = "slot-booking-backend"
SERVICE_VERSION = "1.0.0"
