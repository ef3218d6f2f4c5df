"""
Interfaces layer.

FastAPI routers, Pydantic request/response schemas and dependency
wiring. Routes call use cases and translate results into responses.
"""
