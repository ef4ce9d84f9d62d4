"""Explore Decisions Package: like/pass decision storage and match queries.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
