from sqlalchemy.types import Text, TypeDecorator

from utils.crypto import decrypt_str, encrypt_str


class EncryptedText(TypeDecorator):
    """Credential column kept Fernet-encrypted in the database.

    Values are encrypted on write and decrypted on load; a row whose
    ciphertext matches none of the configured keys raises
    :class:`utils.crypto.DecryptionError` when read. Ciphertexts differ on
    every write, so these columns cannot be filtered on.
    """
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, str):
            raise TypeError(f'EncryptedText expects str, got {type(value).__name__}')
        return encrypt_str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else decrypt_str(value)
