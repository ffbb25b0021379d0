"""Infrastructure Layer: database session management, logging, and the clock.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All database faults mapped to DatabaseError before they leave this layer

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
