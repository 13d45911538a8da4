"""
Pydantic schema definitions for API payloads.

Each resource (users, services, hotels, invoices, etc.) defines its own
models for request and response bodies.  Schemas are separated from
the database tables to decouple API representation from persistence.
"""
