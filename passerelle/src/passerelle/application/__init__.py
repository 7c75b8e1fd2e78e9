"""Passerelle application layer."""
