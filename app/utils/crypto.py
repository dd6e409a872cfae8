from cryptography.fernet import Fernet, InvalidToken, MultiFernet
from config import DATA_ENCRYPTION_KEYS

_PREFIX = "enc:"

class DecryptionError(ValueError):
    """Stored ciphertext matched none of the configured keys."""

# The first key encrypts; every key is tried when decrypting, so old keys can
# stay listed after a rotation.
_fernet = MultiFernet([Fernet(k.encode()) for k in DATA_ENCRYPTION_KEYS])

def encrypt_str(value: str) -> str:
    return _PREFIX + _fernet.encrypt(value.encode("utf-8")).decode("utf-8")

def decrypt_str(value: str) -> str:
    # Values written before encryption was enabled are returned unchanged.
    if not value.startswith(_PREFIX):
        return value

    token = value[len(_PREFIX):].encode("utf-8")
    try:
        return _fernet.decrypt(token).decode("utf-8")
    except InvalidToken as e:
        raise DecryptionError("Unable to decrypt (no key matched)") from e
