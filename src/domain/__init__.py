"""
Domain Layer

Contains the order entities, value objects and repository contracts.
"""
