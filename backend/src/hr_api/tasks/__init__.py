"""Background tasks package."""

from hr_api.tasks.scheduler import HrMonitor

__all__ = [
    "HrMonitor",
]
