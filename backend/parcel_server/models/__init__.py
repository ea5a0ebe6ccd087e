"""
ORM models for the five collections.

Importing this package registers every table on Base.metadata
(used by Alembic and by the test suite's create_all).
"""

from parcel_server.models.parcel import Parcel
from parcel_server.models.payment import Payment
from parcel_server.models.rider import Rider
from parcel_server.models.tracking import TrackingEvent
from parcel_server.models.user import User

__all__ = ["Parcel", "Payment", "Rider", "TrackingEvent", "User"]
