"""
env.py

Loads the per-environment dotenv file (envs/.env.<ENV>) and exposes the
settings the tests need. Values encrypted with utils.crypto_utils can be
decrypted on read with the "<ENV>_SECRET_KEY" secret.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from utils.config import load_config, get_env_dir, get_env_var_name
from utils.crypto_utils import decrypt
from utils.error_handler import handle_error

logger = logging.getLogger(__name__)

CONFIG = load_config()


class EnvironmentConfigError(Exception):
    """Raised when a required environment setting is missing."""


def get_env_name() -> Optional[str]:
    """The environment selected for this run (e.g. 'uat'), or None."""
    return os.getenv(get_env_var_name(CONFIG)) or None


def get_env_file_path(env_name: Optional[str] = None) -> str:
    """Path of envs/.env.<env_name>, or envs/.env when no name is given."""
    env_dir = get_env_dir(CONFIG)
    if not env_name:
        return os.path.join(env_dir, ".env")
    return os.path.join(env_dir, f".env.{env_name}")


def load_environment(env_name: Optional[str] = None) -> Optional[str]:
    """
    Load the dotenv file for the selected environment, overriding variables
    already present in the process.

    Args:
        env_name: Explicit environment; falls back to the ENV variable.

    Returns:
        The loaded file path, or None when no environment is selected.
    """
    env_name = env_name or get_env_name()
    if not env_name:
        logger.error(f"{get_env_var_name(CONFIG)} variable is not set.")
        return None

    env_path = get_env_file_path(env_name)
    try:
        # Secret keys live in the base .env; environment values win on conflicts.
        load_dotenv(get_env_file_path(), override=False)
        loaded = load_dotenv(env_path, override=True)
    except OSError as e:
        handle_error(e, "load_environment", f"loading environment variables from {env_path}")
        raise

    if loaded:
        logger.info(f"Environment variables loaded from {env_path}")
    else:
        logger.warning(f"No environment variables found in {env_path}")
    return env_path


def get_secret_key(env_name: Optional[str] = None) -> str:
    """
    The key used to decrypt env values: "<ENV>_SECRET_KEY" when an
    environment is selected, otherwise SECRET_KEY.
    """
    env_name = env_name or get_env_name()
    candidates = [f"{env_name.upper()}_SECRET_KEY"] if env_name else []
    candidates.append("SECRET_KEY")

    for name in candidates:
        value = os.getenv(name)
        if value:
            return value
    raise EnvironmentConfigError(f"{candidates[0]} not found in environment")


def get_setting(name: str, required: bool = True, decrypt_value: bool = False) -> Optional[str]:
    """
    Read an environment setting.

    Raises:
        EnvironmentConfigError: the setting is required but missing.
        DecryptionError: decrypt_value is set and the stored value cannot be decrypted.
    """
    value = os.getenv(name)
    if not value:
        if required:
            message = f"{name} is not set in the environment variable."
            logger.error(message)
            raise EnvironmentConfigError(message)
        return None

    if decrypt_value:
        return decrypt(value, get_secret_key())
    return value


def get_base_url() -> str:
    return get_setting("URL")


def get_api_url() -> str:
    return get_setting("API_URL")


def get_username(decrypt_value: bool = False) -> str:
    return get_setting("USERNAME", decrypt_value=decrypt_value)


def get_password(decrypt_value: bool = False) -> str:
    return get_setting("PASSWORD", decrypt_value=decrypt_value)


def get_access_token(decrypt_value: bool = False) -> str:
    return get_setting("ACCESS_TOKEN", decrypt_value=decrypt_value)
