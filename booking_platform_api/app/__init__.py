"""
Application package initializer.

Holds the FastAPI entrypoint and its submodules: ``core`` (settings,
database, security, ownership and storage helpers), ``schemas``
(pydantic request and response models), ``services`` (one service
class per resource) and ``api`` (versioned routers, one endpoint
module per resource).
"""

from .main import app  # noqa: F401
