"""Services Layer: request-facing operations composed from store calls.

Invariants:
    - Services depend on core/ protocols, not on SQLAlchemy
"""
