"""
keyward - guarded IAM access-key rotation with secret escrow
"""

__version__ = "0.1.0"
