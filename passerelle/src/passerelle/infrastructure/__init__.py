"""Passerelle infrastructure layer."""
