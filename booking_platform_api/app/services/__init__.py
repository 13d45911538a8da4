"""
Service layer.

Each service class encapsulates the persistence and business rules of
one resource.  Methods open their own SQLite connection, raise the
errors from ``core.errors`` and record an audit entry for every write,
so API handlers only translate between HTTP and service calls.
"""
