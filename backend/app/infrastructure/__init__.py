"""Infrastructure Layer — database access, render cache and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All store failures mapped to core DatabaseError before leaving this layer
"""
