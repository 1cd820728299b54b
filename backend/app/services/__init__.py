"""Services Layer — async orchestration of core rules around repository IO.

Invariants:
    - Services depend on core protocols, never on SQLAlchemy directly
    - Services raise only PostServiceError subclasses
"""
