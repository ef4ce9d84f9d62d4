"""Infrastructure Layer: database access, storage, and cross-cutting concerns.

Invariants:
    - Infrastructure may import core/; core never imports infrastructure
    - All SQLAlchemy failures leave this layer as DatabaseError (core/errors.py)
"""
