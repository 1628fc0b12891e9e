"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain enums from core/ used for kind/sort fields

Design Decisions:
    - Schemas never import ORM models
"""
