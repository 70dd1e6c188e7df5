"""
AWS IAM implementation of the credential directory
"""

import logging
from typing import List, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DirectoryError
from ..models.access_key import AccessKey
from .credential_directory import CredentialDirectory


logger = logging.getLogger(__name__)


def _error_code(error: ClientError) -> str:
    return error.response.get('Error', {}).get('Code', '')


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        details = error.response.get('Error', {})
        return f"{details.get('Code', 'Unknown')}: {details.get('Message', str(error))}"
    return str(error)


class IAMCredentialDirectory(CredentialDirectory):
    """
    Access key operations against AWS IAM through boto3

    Every botocore error is translated into DirectoryError so callers only
    deal with the keyward taxonomy.
    """

    def __init__(self, iam_client, sts_client=None):
        """
        Args:
            iam_client: boto3 IAM client
            sts_client: boto3 STS client, used to fall back to the account id
                when the account has no alias
        """
        self.iam = iam_client
        self.sts = sts_client

    @classmethod
    def from_session(cls, session) -> 'IAMCredentialDirectory':
        """Build the directory from a boto3 session"""
        return cls(session.client('iam'), session.client('sts'))

    def get_principal(self, name: str) -> bool:
        try:
            self.iam.get_user(UserName=name)
            return True
        except ClientError as e:
            if _error_code(e) in ('NoSuchEntity', 'NoSuchEntityException'):
                logger.debug(f"IAM user {name} does not exist")
                return False
            raise DirectoryError(f"Failed to look up IAM user {name}: {_error_message(e)}", e)
        except BotoCoreError as e:
            raise DirectoryError(f"Failed to look up IAM user {name}: {_error_message(e)}", e)

    def list_keys(self, name: str) -> List[AccessKey]:
        keys = []
        try:
            paginator = self.iam.get_paginator('list_access_keys')
            for page in paginator.paginate(UserName=name):
                for metadata in page.get('AccessKeyMetadata', []):
                    keys.append(AccessKey.from_dict(metadata))
        except (ClientError, BotoCoreError) as e:
            raise DirectoryError(f"Failed to list access keys for {name}: {_error_message(e)}", e)

        logger.debug(f"Listed {len(keys)} access keys for {name}")
        return keys

    def delete_key(self, name: str, key_id: str) -> None:
        try:
            self.iam.delete_access_key(UserName=name, AccessKeyId=key_id)
        except (ClientError, BotoCoreError) as e:
            raise DirectoryError(_error_message(e), e)

    def create_key(self, name: str) -> Tuple[str, str]:
        try:
            response = self.iam.create_access_key(UserName=name)
        except (ClientError, BotoCoreError) as e:
            raise DirectoryError(_error_message(e), e)

        access_key = response['AccessKey']
        return access_key['AccessKeyId'], access_key['SecretAccessKey']

    def get_account_label(self) -> str:
        """First account alias, or the account id when no alias is set"""
        try:
            aliases = self.iam.list_account_aliases().get('AccountAliases', [])
            if aliases:
                return aliases[0]
            if self.sts is not None:
                return self.sts.get_caller_identity()['Account']
        except (ClientError, BotoCoreError) as e:
            raise DirectoryError(f"Failed to resolve account label: {_error_message(e)}", e)

        raise DirectoryError("Account has no alias and no STS client is configured")
