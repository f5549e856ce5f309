"""Pydantic Schemas: request facet models and response shapes.

Invariants:
    - Schemas validate at system boundary (path params, query, body)
    - Domain enums from core/ used for constrained fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
