"""Database Infrastructure: SQLAlchemy declarative Base.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)

Design Decisions:
    - aiosqlite for the default single-reader setup, asyncpg for PostgreSQL
      (ADR: native async drivers, no thread pool overhead)
"""
