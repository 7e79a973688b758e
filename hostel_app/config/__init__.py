"""
Configuration package for the hostel booking backend.

Environment settings and logging setup.
"""

from hostel_app.config.logging import setup_logging
from hostel_app.config.settings import Settings, get_settings

__all__ = ['Settings', 'get_settings', 'setup_logging']
