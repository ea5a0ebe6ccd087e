"""
Status vocabularies shared by models, schemas and services.

Delivery status is intentionally open: riders may report any string, so
DeliveryStatus only names the values the server itself writes or filters on.
"""

from enum import Enum


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    RIDER_ASSIGNED = "rider_assigned"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    SERVICE_CENTER_DELIVERED = "service_center_delivered"


class CashoutStatus(str, Enum):
    PENDING = "pending"
    CASHED_OUT = "cashed_out"


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"
    RIDER = "rider"


class RiderStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    ACTIVE = "active"


class WorkStatus(str, Enum):
    IDLE = "idle"
    IN_DELIVERY = "in_delivery"


# Rider dashboards
ACTIVE_DELIVERY_STATUSES = (
    DeliveryStatus.RIDER_ASSIGNED.value,
    DeliveryStatus.IN_TRANSIT.value,
)
COMPLETED_DELIVERY_STATUSES = (
    DeliveryStatus.DELIVERED.value,
    DeliveryStatus.SERVICE_CENTER_DELIVERED.value,
)
