"""Dependency wiring for request-scoped services."""

from .dependency_injection import DependencyContainer, get_container

__all__ = [
    "DependencyContainer",
    "get_container",
]
