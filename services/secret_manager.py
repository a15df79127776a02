# services/secret_manager.py
import logging
import os
from typing import Optional

from dotenv import dotenv_values, set_key

from utils.config import load_config, get_secret_key_bytes
from utils.crypto_utils import encrypt
from utils.env import EnvironmentConfigError, get_env_file_path
from utils.error_handler import handle_error

# Load the config.yaml which contains path folder settings. NOTE: OS specific yaml files will override default config.yaml
config = load_config()
SECRET_KEY_BYTES = get_secret_key_bytes(config)

logger = logging.getLogger(__name__)

# ===============================================
# Secret key generation
# ===============================================

def generate_and_store_secret_key(key_name: str = "SECRET_KEY", env_file_path: Optional[str] = None) -> str:
    """
    Generate a random 256-bit key and write it to the base dotenv file.

    An existing entry with the same name is replaced; the file is created
    when missing.

    Returns:
        The generated key as a hex string.
    """
    secret_key = os.urandom(SECRET_KEY_BYTES).hex()
    env_file_path = env_file_path or get_env_file_path()

    if not os.path.exists(env_file_path):
        os.makedirs(os.path.dirname(env_file_path) or ".", exist_ok=True)
        with open(env_file_path, "w", encoding="utf-8"):
            pass
        logger.info(f"{env_file_path} created")

    set_key(env_file_path, key_name, secret_key, quote_mode="never")
    logger.info(f"{key_name} written to {os.path.basename(env_file_path)} file")
    return secret_key

# ===============================================
# Env file encryption
# ===============================================

def _encrypt_line(line: str, secret_key: str) -> str:
    stripped = line.strip()
    if not stripped or stripped.startswith("#") or "=" not in stripped:
        return line

    key, _, value = line.partition("=")
    value = value.strip()
    if not value:
        return line
    return f"{key}={encrypt(value, secret_key)}"


def encrypt_env_file(env_file_path: str, secret_key: str) -> int:
    """
    Encrypt the value of every KEY=value line of a dotenv file in place.

    Blank lines, comments and keys without a value are kept as they are.

    Returns:
        Number of variables encrypted.
    """
    try:
        with open(env_file_path, "r", encoding="utf-8") as f:
            lines = f.read().split("\n")

        encrypted_lines = [_encrypt_line(line, secret_key) for line in lines]
        encrypted_count = sum(1 for old, new in zip(lines, encrypted_lines) if old != new)

        with open(env_file_path, "w", encoding="utf-8") as f:
            f.write("\n".join(encrypted_lines))
    except OSError as e:
        handle_error(e, "encrypt_env_file", f"Failed to encrypt env file: {env_file_path}")
        raise

    relative_path = os.path.relpath(env_file_path)
    logger.info(
        f"Encryption complete. Successfully encrypted {encrypted_count} variable(s) in the {relative_path} file."
    )
    return encrypted_count


def encrypt_env_for(env_name: str) -> int:
    """
    Encrypt envs/.env.<env_name> with the <ENV_NAME>_SECRET_KEY stored in envs/.env.

    Raises:
        EnvironmentConfigError: the secret key has not been generated yet.
    """
    key_name = f"{env_name.upper()}_SECRET_KEY"
    base_values = dotenv_values(get_env_file_path())
    secret_key = base_values.get(key_name) or os.getenv(key_name)
    if not secret_key:
        raise EnvironmentConfigError(f"{key_name} not found in .env file")

    return encrypt_env_file(get_env_file_path(env_name), secret_key)
