"""Services Layer: repositories, mark commands, response composer, and mark dispatch.

Invariants:
    - Services implement the core's boundary protocols against the database
    - Mark dispatch uses an explicit dict mapping (no auto-discovery)

Design Decisions:
    - One file per responsibility for locality (ADR: no god objects)
"""
