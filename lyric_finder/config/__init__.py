"""
Configuration management package for Lyric-Finder

Settings are loaded from YAML files and environment variables into dataclass
sections (server, lyrics, logging) and exposed through a singleton:

    from lyric_finder.config import get_settings

    settings = get_settings()
    port = settings.server.port

Configuration sources, in order of precedence:
1. Environment variables (highest priority, for secrets and deployment values)
2. YAML configuration file
3. Default values
"""

from .settings import get_settings, reload_settings, Settings

__all__ = [
    'get_settings',      # Factory function for singleton settings access
    'reload_settings',   # Reload settings from files and environment
    'Settings',          # Settings class for direct instantiation (tests, tools)
]
