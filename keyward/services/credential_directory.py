"""
Credential directory interface - the identity provider's key API
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from ..models.access_key import AccessKey


class CredentialDirectory(ABC):
    """
    Identity provider operations consumed by the rotation workflow

    Implementations raise DirectoryError when a call is rejected or the
    provider cannot be reached.
    """

    @abstractmethod
    def get_principal(self, name: str) -> bool:
        """Return True if the principal exists"""

    @abstractmethod
    def list_keys(self, name: str) -> List[AccessKey]:
        """Return every access key of the principal, any status"""

    @abstractmethod
    def delete_key(self, name: str, key_id: str) -> None:
        """Delete one access key"""

    @abstractmethod
    def create_key(self, name: str) -> Tuple[str, str]:
        """Mint a new access key and return (key_id, secret)"""

    @abstractmethod
    def get_account_label(self) -> str:
        """Human-readable label of the account, used only in reports"""
