"""Configuration package."""

from .settings import AppSettings, HostSettings, get_settings, reload_settings

__all__ = ['AppSettings', 'HostSettings', 'get_settings', 'reload_settings']
