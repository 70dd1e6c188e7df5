"""
Utility functions and helpers for keyward
"""

from .encryption import EncryptionManager, generate_master_key
from .validation import validate_principal_name, validate_secret_name

__all__ = ['EncryptionManager', 'generate_master_key', 'validate_principal_name', 'validate_secret_name']
