"""
FastAPI routers for the Students API.

Each module defines a router for a specific domain. Handlers follow the
decode -> validate -> respond flow and write exactly one response per request.
"""
