"""
Mutation executor - applies approved actions to the credential directory
"""

import logging
from typing import Tuple

from ..exceptions import CreationFailed, DeletionFailed, DirectoryError
from ..models.rotation_decision import ActionResult, RetireKey
from .credential_directory import CredentialDirectory


logger = logging.getLogger(__name__)


class MutationExecutor:
    """Issues one directory mutation at a time"""

    def __init__(self, directory: CredentialDirectory):
        self.directory = directory

    def retire(self, principal: str, key_id: str) -> ActionResult:
        """
        Delete an access key

        A rejected deletion is logged and captured in the result as a
        DeletionFailed message; it never aborts the workflow.

        Returns:
            ActionResult for the approved RetireKey action
        """
        result = ActionResult(action=RetireKey(key_id), approved=True)
        try:
            self.directory.delete_key(principal, key_id)
        except DirectoryError as e:
            failure = DeletionFailed(key_id, str(e))
            logger.error(str(failure))
            result.error = str(failure)
            return result

        result.succeeded = True
        logger.info(f"Deleted access key {key_id} for {principal}")
        return result

    def create(self, principal: str) -> Tuple[str, str]:
        """
        Mint a new access key

        Returns:
            (key_id, secret)

        Raises:
            CreationFailed: If the directory rejects the creation
        """
        try:
            key_id, secret = self.directory.create_key(principal)
        except DirectoryError as e:
            raise CreationFailed(str(e))

        logger.info(f"Created access key {key_id} for {principal}")
        return key_id, secret
