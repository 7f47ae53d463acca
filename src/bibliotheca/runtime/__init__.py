"""Runtime services: telemetry and environment settings."""

from . import telemetry
from .settings import FileFilter, Settings

__all__ = ["telemetry", "FileFilter", "Settings"]
