"""Post Service Application Package — lifecycle management for the Post resource.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
