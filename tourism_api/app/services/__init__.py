"""
Service layer.

Each service encapsulates the business logic for one resource and is
constructed with the database handle it works on, so API handlers and
tests decide which store a service talks to.
"""
