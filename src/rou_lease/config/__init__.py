"""Configuration models — contract input and application settings."""

from rou_lease.config.contract import LeaseContract, ReportingFrequency
from rou_lease.config.settings import AppSettings

__all__ = [
    "LeaseContract",
    "ReportingFrequency",
    "AppSettings",
]
