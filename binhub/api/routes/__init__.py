"""Route Modules — one file per screen family.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes fetch through services/, shape data through core/, render templates
"""
