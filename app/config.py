from pathlib import Path
import os
from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
ENV_PATH = ROOT / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


DATA_DIR = ROOT / 'data'

DATABASE_URL = os.getenv('DATABASE_URL') or f'sqlite:///{DATA_DIR / "identity.db"}'
DATABASE_ECHO = _env_flag('DATABASE_ECHO')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Login compares the supplied security key with the stored one only when set.
VERIFY_SECURITY_KEY = _env_flag('VERIFY_SECURITY_KEY')

DEFAULT_PHOTO_WIDTH = 100
DEFAULT_PHOTO_HEIGHT = 100
DEFAULT_PHOTO_QUALITY = 85

PLACEHOLDER_LOCATION = 'unknown'

DATA_ENCRYPTION_KEYS_RAW = os.getenv('DATA_ENCRYPTION_KEYS')
if not DATA_ENCRYPTION_KEYS_RAW:
    raise RuntimeError('Missing env variable: DATA_ENCRYPTION_KEYS')

DATA_ENCRYPTION_KEYS = [k.strip() for k in DATA_ENCRYPTION_KEYS_RAW.split(',') if k.strip()]
if not DATA_ENCRYPTION_KEYS:
    raise RuntimeError('Missing env variable: DATA_ENCRYPTION_KEYS')
