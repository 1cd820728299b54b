"""Database Metadata — SQLAlchemy declarative Base.

Invariants:
    - Engine and session lifecycle live in infrastructure/database.py, not here
"""
