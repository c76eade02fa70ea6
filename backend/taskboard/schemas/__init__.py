"""GraphQL Schemas - strawberry output types for the /graphql endpoint.

Invariants:
    - Types convert from ORM rows and core events, never the reverse
"""
