"""
Encryption utilities for escrowed secrets at rest
"""

import base64
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


DEFAULT_SALT = b'keyward_escrow_salt_v1'
KDF_ITERATIONS = 390000


class EncryptionManager:
    """
    Encrypts and decrypts escrow payloads with Fernet
    (AES-128 in CBC mode with an HMAC-SHA256 authentication tag)
    """

    def __init__(self, master_key: str = None, salt: bytes = DEFAULT_SALT):
        """
        Initialize encryption manager with master key

        Args:
            master_key: Master password the Fernet key is derived from.
                If None, a random key is generated and lives only as long
                as this instance.
            salt: Salt for key derivation
        """
        if master_key:
            self._key = self._derive_key_from_password(master_key, salt)
        else:
            self._key = Fernet.generate_key()
        self._fernet = Fernet(self._key)

    def _derive_key_from_password(self, password: str, salt: bytes) -> bytes:
        """Derive a Fernet key from a password using PBKDF2-SHA256"""
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=KDF_ITERATIONS,
        )
        return base64.urlsafe_b64encode(kdf.derive(password.encode()))

    def encrypt(self, plaintext: str) -> bytes:
        """
        Encrypt plaintext string to bytes

        Args:
            plaintext: String to encrypt

        Returns:
            Encrypted token bytes
        """
        if not isinstance(plaintext, str):
            raise ValueError("Plaintext must be a string")

        return self._fernet.encrypt(plaintext.encode('utf-8'))

    def decrypt(self, encrypted_data: bytes) -> str:
        """
        Decrypt bytes to plaintext string

        Raises:
            ValueError: If the data is not bytes or was encrypted with a different key
        """
        if not isinstance(encrypted_data, bytes):
            raise ValueError("Encrypted data must be bytes")

        try:
            decrypted_bytes = self._fernet.decrypt(encrypted_data)
        except InvalidToken:
            raise ValueError("Encrypted data could not be decrypted with this master key")
        return decrypted_bytes.decode('utf-8')


def generate_master_key() -> str:
    """
    Generate a random master password suitable for KEYWARD_MASTER_KEY

    Returns:
        URL-safe base64 string
    """
    return Fernet.generate_key().decode('utf-8')
