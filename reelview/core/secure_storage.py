# reelview/core/secure_storage.py
"""
Secure credential management using the keyring library.
Holds the catalog API key outside of the plain settings file.
"""

import logging
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

# Use a single, consistent service name for the application
KEYRING_SERVICE_NAME = "ReelView"


class SecureStorage:
    """A wrapper for the keyring library."""

    def __init__(self, service_name: str = KEYRING_SERVICE_NAME):
        self.service_name = service_name

    def set_credential(self, key: str, password: str) -> bool:
        """
        Saves a credential to the OS secure vault.

        Args:
            key: The unique identifier (e.g., "tmdb_api_key")
            password: The secret to store.
        Returns:
            True if the credential was stored.
        """
        try:
            keyring.set_password(self.service_name, key, password)
            logger.info(f"Securely stored credential for: {key}")
            return True
        except KeyringError as e:
            logger.error(f"Failed to store credential for {key}: {e}")
            return False

    def get_credential(self, key: str) -> Optional[str]:
        """
        Retrieves a credential from the OS secure vault.

        Returns:
            The stored secret or None if not found.
        """
        try:
            password = keyring.get_password(self.service_name, key)
            if password:
                logger.debug(f"Retrieved credential for: {key}")
            return password
        except KeyringError as e:
            logger.error(f"Failed to retrieve credential for {key}: {e}")
            return None

    def delete_credential(self, key: str):
        try:
            keyring.delete_password(self.service_name, key)
            logger.info(f"Deleted credential for: {key}")
        except PasswordDeleteError:
            logger.warning(f"No credential found to delete for: {key}")
        except KeyringError as e:
            logger.error(f"Failed to delete credential for {key}: {e}")
