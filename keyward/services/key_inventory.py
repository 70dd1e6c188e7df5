"""
Key inventory resolver - fetches a principal's keys and partitions them by status
"""

import logging

from ..exceptions import DirectoryError, DirectoryUnavailable, PrincipalNotFound
from ..models.access_key import KeyInventory, Principal
from .credential_directory import CredentialDirectory


logger = logging.getLogger(__name__)


class KeyInventoryResolver:
    """Looks up a principal and returns its keys split into active and inactive"""

    def __init__(self, directory: CredentialDirectory):
        self.directory = directory

    def lookup(self, name: str) -> Principal:
        """
        Ask the directory whether a principal exists

        Raises:
            DirectoryUnavailable: If the directory could not be queried
        """
        try:
            exists = self.directory.get_principal(name)
        except DirectoryError as e:
            raise DirectoryUnavailable(str(e), e.cause)
        return Principal(name=name, exists=bool(exists))

    def resolve(self, principal: str) -> KeyInventory:
        """
        Resolve the current key inventory of a principal

        Args:
            principal: Principal name

        Returns:
            KeyInventory with active and inactive partitions. Ordering within
            a partition follows the directory listing and carries no meaning.

        Raises:
            PrincipalNotFound: If the principal does not exist
            DirectoryUnavailable: If the directory could not be queried
        """
        if not self.lookup(principal).exists:
            raise PrincipalNotFound(principal)

        try:
            keys = self.directory.list_keys(principal)
        except DirectoryError as e:
            raise DirectoryUnavailable(str(e), e.cause)

        inventory = KeyInventory.from_keys(principal, keys)
        logger.info(
            f"Resolved {inventory.total} access keys for {principal} "
            f"({len(inventory.active)} active, {len(inventory.inactive)} inactive)"
        )
        return inventory
