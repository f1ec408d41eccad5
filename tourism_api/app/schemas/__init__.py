"""
Pydantic schema definitions for API payloads.

Each resource (users, packages, bookings, etc.) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the stored documents to decouple the API representation
from persistence.
"""
