"""Dependency injection."""

from passerelle.di.container import DIContainer

__all__ = ["DIContainer"]
