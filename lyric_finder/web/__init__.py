"""
Web interface for Lyric-Finder (aiohttp + jinja2)
"""

from .app import create_app, run_server

__all__ = ['create_app', 'run_server']
