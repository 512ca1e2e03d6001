"""Infrastructure layer — query-builder adapters.

This layer depends on stdlib and SQLAlchemy. It never executes queries;
it only appends range conditions to statements owned by the caller.
"""
