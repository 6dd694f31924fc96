"""
Configuration settings - Infrastructure component for managing application configuration.
Uses pydantic-settings for validation and environment variable loading.
"""

from __future__ import annotations
import os
from typing import List, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_internal_path() -> str:
    # Android keeps app data under /data; elsewhere report the root filesystem
    return "/data" if os.path.isdir("/data") and os.access("/data", os.R_OK) else "/"


class HostSettings(BaseSettings):
    """Where the local host provider reads its facts from."""

    model_config = SettingsConfigDict(env_prefix='SYSINFO_', env_file='.env', extra='ignore')

    internal_storage_path: str = Field(default_factory=_default_internal_path)
    external_storage_path: str = '/storage/emulated/0'
    cpuinfo_path: str = '/proc/cpuinfo'
    version_path: str = '/proc/version'

    # Extra su locations checked besides PATH
    su_paths: str = '/system/bin/su,/system/xbin/su'

    # Cap on bytes read from /proc text sources
    max_read_bytes: int = 65536
    # Give up on a text source that stays unreadable this long
    read_timeout_s: float = 2.0
    getprop_timeout_s: float = 2.0

    @field_validator('max_read_bytes')
    @classmethod
    def validate_max_read_bytes(cls, v):
        """Keep the read cap within a sane range."""
        return max(1024, min(v, 1024 * 1024))

    @field_validator('read_timeout_s', 'getprop_timeout_s')
    @classmethod
    def validate_timeout(cls, v):
        return max(0.05, v)

    @property
    def su_path_list(self) -> Tuple[str, ...]:
        return tuple(p.strip() for p in self.su_paths.split(',') if p.strip())


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(env_prefix='SYSINFO_', env_file='.env', extra='ignore')

    host: HostSettings = Field(default_factory=HostSettings)

    accent_color: int = 0x2ECC71

    # Plugin paths
    commands_dir: str = ''

    # Logging
    log_level: str = 'INFO'
    log_format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            return 'INFO'
        return v.upper()

    @field_validator('accent_color', mode='before')
    @classmethod
    def parse_accent_color(cls, v):
        """Accept hex strings such as '0x2ECC71' or '#2ECC71'."""
        if isinstance(v, str):
            s = v.strip().lower()
            if s.startswith('#'):
                return int(s[1:], 16)
            return int(s, 0)
        return v

    @property
    def command_paths(self) -> List[str]:
        """Parse os.pathsep-separated command plugin directories."""
        return [p.strip() for p in self.commands_dir.split(os.pathsep) if p.strip()]


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Reload settings from environment (for testing)."""
    global _settings
    _settings = AppSettings()
    return _settings
