"""
AWS Secrets Manager escrow backend
"""

import logging
from typing import Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import EscrowNameCollision, EscrowUnavailable
from ..utils.validation import validate_secret_name
from .secret_escrow import SecretEscrow


logger = logging.getLogger(__name__)


class SecretsManagerEscrow(SecretEscrow):
    """
    Stores each secret as a new Secrets Manager secret

    Only create_secret is used. A name that already exists is a collision,
    never an update.
    """

    def __init__(self, client, kms_key_id: Optional[str] = None,
                 tags: Optional[Dict[str, str]] = None):
        """
        Args:
            client: boto3 secretsmanager client
            kms_key_id: KMS key used to encrypt the secret (account default if None)
            tags: Tags applied to every created secret
        """
        self.client = client
        self.kms_key_id = kms_key_id
        self.tags = tags or {'managed-by': 'keyward'}

    @classmethod
    def from_session(cls, session, kms_key_id: Optional[str] = None) -> 'SecretsManagerEscrow':
        return cls(session.client('secretsmanager'), kms_key_id=kms_key_id)

    def accepts_name(self, name: str) -> bool:
        return validate_secret_name(name)

    def put_secret(self, name: str, payload: str) -> None:
        params = {
            'Name': name,
            'SecretString': payload,
            'Description': 'IAM access key escrowed during rotation',
            'Tags': [{'Key': key, 'Value': value} for key, value in self.tags.items()],
        }
        if self.kms_key_id:
            params['KmsKeyId'] = self.kms_key_id

        try:
            response = self.client.create_secret(**params)
        except ClientError as e:
            error = e.response.get('Error', {})
            code = error.get('Code', '')
            if code == 'ResourceExistsException':
                raise EscrowNameCollision(name)
            # A secret pending deletion still owns its name
            if code == 'InvalidRequestException' and 'scheduled for deletion' in error.get('Message', ''):
                raise EscrowNameCollision(name)
            raise EscrowUnavailable(name, f"{code}: {e}")
        except BotoCoreError as e:
            raise EscrowUnavailable(name, str(e))

        logger.debug(f"Created secret {response.get('ARN', name)}")
