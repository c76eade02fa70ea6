"""API Layer - GraphQL router, health endpoints, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Resolvers delegate to TaskService
"""
