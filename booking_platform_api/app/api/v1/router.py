"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers (accounts, catalogue
lookups, services and their hotels/restaurants/cafés, bookings and
reviews) under a unified prefix.  Lookup collections share one router
factory, see ``endpoints/lookups.py``.
"""

from fastapi import APIRouter

from .endpoints import (
    admins,
    audit,
    auth,
    coffees,
    customers,
    hotels,
    invoices,
    lookups,
    providers,
    restaurants,
    reviews,
    rooms,
    services,
    tables,
    users,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(providers.router, prefix="/providers", tags=["providers"])
router.include_router(admins.router, prefix="/admins", tags=["admins"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])

router.include_router(lookups.locations, prefix="/locations", tags=["locations"])
router.include_router(lookups.facility_types, prefix="/facility-types", tags=["lookups"])
router.include_router(lookups.facilities, prefix="/facilities", tags=["lookups"])
router.include_router(lookups.price_categories, prefix="/price-categories", tags=["lookups"])
router.include_router(lookups.suitabilities, prefix="/suitabilities", tags=["lookups"])
router.include_router(lookups.cuisine_types, prefix="/cuisine-types", tags=["lookups"])
router.include_router(lookups.dish_types, prefix="/dish-types", tags=["lookups"])
router.include_router(lookups.hotel_types, prefix="/hotel-types", tags=["lookups"])
router.include_router(lookups.restaurant_types, prefix="/restaurant-types", tags=["lookups"])
router.include_router(lookups.coffee_types, prefix="/coffee-types", tags=["lookups"])
router.include_router(lookups.restaurant_filters, prefix="/restaurant-filters", tags=["lookups"])

router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(hotels.router, prefix="/hotels", tags=["hotels"])
router.include_router(rooms.router, prefix="/rooms", tags=["rooms"])
router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
router.include_router(tables.router, prefix="/tables", tags=["tables"])
router.include_router(coffees.router, prefix="/coffees", tags=["coffees"])
router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
