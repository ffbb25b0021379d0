"""Pydantic Schemas: shapes of the Fever protocol objects.

Invariants:
    - Schemas describe the wire format; ORM models own persistence
    - model_dump() output is what goes into the JSON body, key for key

Design Decisions:
    - Separate from models: schemas are protocol contracts, models are persistence (ADR: DDD boundary)
"""
