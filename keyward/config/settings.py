"""
Runtime configuration for keyward
Settings come from the environment (optionally a .env file) and can be
overridden by CLI flags
"""

import os
import logging
from typing import Optional

import boto3
from dotenv import load_dotenv

from ..exceptions import ConfigurationError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

ESCROW_BACKENDS = ('secretsmanager', 'local')


class Settings:
    """Configuration for one rotation run"""

    def __init__(self, region: Optional[str] = None, profile: Optional[str] = None,
                 escrow_backend: str = 'secretsmanager',
                 escrow_db_path: str = 'keyward_escrow.db',
                 master_key: Optional[str] = None,
                 kms_key_id: Optional[str] = None,
                 log_level: str = 'INFO'):
        self.region = region
        self.profile = profile
        self.escrow_backend = escrow_backend
        self.escrow_db_path = escrow_db_path
        self.master_key = master_key
        self.kms_key_id = kms_key_id
        self.log_level = log_level

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables"""
        return cls(
            region=os.getenv('AWS_REGION') or os.getenv('AWS_DEFAULT_REGION') or 'us-east-1',
            profile=os.getenv('AWS_PROFILE') or None,
            escrow_backend=os.getenv('KEYWARD_ESCROW_BACKEND', 'secretsmanager'),
            escrow_db_path=os.getenv('KEYWARD_ESCROW_DB', 'keyward_escrow.db'),
            master_key=os.getenv('KEYWARD_MASTER_KEY') or None,
            kms_key_id=os.getenv('KEYWARD_KMS_KEY_ID') or None,
            log_level=os.getenv('KEYWARD_LOG_LEVEL', 'INFO'),
        )

    def validate(self) -> None:
        """
        Check that the settings describe a usable configuration

        Raises:
            ConfigurationError: If a setting is missing or unsupported
        """
        if self.escrow_backend not in ESCROW_BACKENDS:
            raise ConfigurationError(
                f"Unsupported escrow backend '{self.escrow_backend}', "
                f"expected one of: {', '.join(ESCROW_BACKENDS)}"
            )
        if self.escrow_backend == 'local':
            if not self.master_key:
                raise ConfigurationError("KEYWARD_MASTER_KEY must be set for the local escrow store")
            if not self.escrow_db_path:
                raise ConfigurationError("KEYWARD_ESCROW_DB must not be empty")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    def get_boto3_session(self) -> boto3.session.Session:
        """Create a boto3 session for the configured profile and region"""
        logger.debug(f"Creating boto3 session (profile={self.profile}, region={self.region})")
        return boto3.session.Session(profile_name=self.profile, region_name=self.region)


def get_settings() -> Settings:
    """Get settings from the current environment - use this in entry points"""
    return Settings.from_env()
