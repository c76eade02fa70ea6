"""Services Layer - task operations and demo seed data."""
