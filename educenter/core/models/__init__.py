"""
Non-persistent models.

- domain/: enumerations shared across layers
- io/: Pydantic request and response schemas for the HTTP API
"""
