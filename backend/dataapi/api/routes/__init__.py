"""Route Modules — one file per resource group of the /api/v2 surface.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never compute stake, probe hosts or query SQL themselves
"""
