"""
Input validation helpers
"""

import re


# IAM user names: ASCII alphanumerics plus +=,.@_- up to 64 characters
_PRINCIPAL_NAME_RE = re.compile(r'[A-Za-z0-9_+=,.@-]{1,64}')

# Secrets Manager names: alphanumerics plus /_+=.@- up to 512 characters
_SECRET_NAME_RE = re.compile(r'[A-Za-z0-9/_+=.@-]{1,512}')


def validate_principal_name(name: str) -> bool:
    """
    Validate a principal name before it is sent to the directory

    Args:
        name: Principal (user) name

    Returns:
        True if valid, False otherwise
    """
    if not isinstance(name, str):
        return False
    return bool(_PRINCIPAL_NAME_RE.fullmatch(name))


def validate_secret_name(name: str) -> bool:
    """Validate an escrow secret name"""
    if not isinstance(name, str):
        return False
    return bool(_SECRET_NAME_RE.fullmatch(name))
