"""Passerelle domain layer."""
