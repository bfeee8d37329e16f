"""
Pydantic schema definitions for API payloads.

Each domain (services, admin auth, payments) defines its own Pydantic
models for request and response bodies.
"""
