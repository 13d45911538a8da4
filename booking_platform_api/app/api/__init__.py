"""
HTTP routes of the Booking Platform API.

Routes live in versioned subpackages.  ``v1.router`` aggregates every
resource router and is included by ``app.main`` under ``/api``.
"""
