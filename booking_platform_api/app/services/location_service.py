"""Service layer for locations.

Locations are shared reference data written by administrators and
providers; they reuse the generic lookup table behaviour.
"""

from booking_platform_api.app.schemas.location import LocationRead
from booking_platform_api.app.services.lookup_service import LookupService


class LocationService(LookupService):
    table = "locations"
    label = "Location"
    object_type = "location"
    read_model = LocationRead
    order_by = "location_name"
