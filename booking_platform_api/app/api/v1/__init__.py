"""
Version 1 of the API.

This subpackage bundles all endpoints of the Booking Platform API.  The
routes are mounted under ``/api``; breaking changes should go into a
new version subpackage (e.g. ``v2``) mounted under its own prefix.
"""
