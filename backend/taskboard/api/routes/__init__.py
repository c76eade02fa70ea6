"""Route Modules - one file per resource/concern.

Invariants:
    - Each module defines its own router
    - Routes never contain business logic (delegate to services/)
"""
