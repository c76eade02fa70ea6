"""Task Board Application Package - GraphQL task board over an embedded store.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
