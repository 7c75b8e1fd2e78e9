"""Monitoring infrastructure."""

from passerelle.infrastructure.monitoring.system_reporter import (
    SystemReporter,
    reporter_from_settings,
)

__all__ = ["SystemReporter", "reporter_from_settings"]
