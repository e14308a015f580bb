"""
Repository layer - Data access abstractions.

This layer provides interfaces for publication and comment persistence,
hiding implementation details from the business logic.
"""
