"""Core — pure domain types, error hierarchy and collaborator ports.

Invariants:
    - No I/O, no framework imports (FastAPI/SQLAlchemy stay outside core/)
"""
