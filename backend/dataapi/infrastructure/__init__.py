"""Infrastructure Layer — database, metadata store, operator handler, metrics, logging.

Invariants:
    - Infrastructure raises errors from core/errors.py, never framework exceptions
"""
