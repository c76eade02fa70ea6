"""Infrastructure Layer - store, change channel, and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures mapped to DatabaseError
"""
