"""Configuration for the MSD347 printer driver."""

from msd347.config.settings import PrinterSettings, get_settings

__all__ = ["PrinterSettings", "get_settings"]
