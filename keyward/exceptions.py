"""
Exception hierarchy for keyward

    KeywardError
    ├── ConfigurationError
    ├── DirectoryError
    │   └── DirectoryUnavailable
    ├── PrincipalNotFound
    ├── DeletionFailed
    ├── CreationFailed
    ├── EscrowError
    │   ├── EscrowNameCollision
    │   └── EscrowUnavailable
    └── RotationInterrupted

Fatal errors carry the process exit status the CLI reports for them.
DeletionFailed is the only non-fatal member: it is recorded per key and the
workflow moves on to the next action.
"""

from typing import Optional


class KeywardError(Exception):
    """Base exception for all keyward errors"""
    exit_code = 1
    fatal = True


class ConfigurationError(KeywardError):
    """Invalid or missing configuration"""
    exit_code = 1


class DirectoryError(KeywardError):
    """A credential directory call was rejected or could not be made"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DirectoryUnavailable(DirectoryError):
    """The directory could not be queried while resolving the inventory"""
    exit_code = 7


class PrincipalNotFound(KeywardError):
    """The principal does not exist in the directory. No mutation was attempted."""
    exit_code = 3

    def __init__(self, principal: str):
        super().__init__(f"Principal not found: {principal}")
        self.principal = principal


class DeletionFailed(KeywardError):
    """The directory refused to delete a key (e.g. it is already gone)"""
    fatal = False

    def __init__(self, key_id: str, cause: str):
        super().__init__(f"Failed to delete access key {key_id}: {cause}")
        self.key_id = key_id
        self.cause = cause


class CreationFailed(KeywardError):
    """The directory refused to mint a new key. Nothing can be escrowed."""
    exit_code = 4

    def __init__(self, cause: str):
        super().__init__(f"Failed to create access key: {cause}")
        self.cause = cause


class EscrowError(KeywardError):
    """
    A minted key could not be escrowed

    The key exists in the directory but its secret has not been persisted,
    so the operator has to secure it by hand.
    """

    def __init__(self, message: str, name: str, key_id: Optional[str] = None):
        super().__init__(message)
        self.name = name
        self.key_id = key_id


class EscrowNameCollision(EscrowError):
    exit_code = 5

    def __init__(self, name: str, key_id: Optional[str] = None):
        super().__init__(f"Escrow secret already exists: {name}", name, key_id)


class EscrowUnavailable(EscrowError):
    exit_code = 6

    def __init__(self, name: str, cause: str, key_id: Optional[str] = None):
        super().__init__(f"Escrow store unavailable while writing {name}: {cause}", name, key_id)
        self.cause = cause


class RotationInterrupted(KeywardError):
    """The operator interrupted the run (Ctrl-C). Actions already executed stand."""
    exit_code = 130

    def __init__(self):
        super().__init__("Interrupted by the operator")
