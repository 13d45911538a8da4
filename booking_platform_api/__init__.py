"""
Top‑level package for the Booking Platform API.

Marks ``booking_platform_api`` as a package so modules under ``app``
can be imported with fully qualified names such as
``booking_platform_api.app.main``, including from tests run at the
repository root.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
