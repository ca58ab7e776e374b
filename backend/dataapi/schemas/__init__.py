"""Pydantic Schemas — wire contracts for every /api/v2 response.

Invariants:
    - All response models are frozen (assembled, serialized, discarded)
    - Binary identifiers travel as lowercase hex strings without 0x

Design Decisions:
    - Schemas double as collaborator return types: the store and the operator
      handler hand back the same models the routes serialize
"""
