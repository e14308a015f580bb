"""
Domain layer - Core business entities and domain logic.

This layer contains publications, comments and the domain result type,
independent of any infrastructure or framework concerns.
"""
