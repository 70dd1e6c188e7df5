"""
Configuration for keyward
"""

from .settings import Settings, get_settings, ESCROW_BACKENDS

__all__ = ['Settings', 'get_settings', 'ESCROW_BACKENDS']
