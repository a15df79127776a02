"""
crypto_utils.py

AES helpers used to keep credentials encrypted inside the dotenv files.

Packed format: "<salt hex>:<iv hex>:<base64 ciphertext>"
  - key  = PBKDF2-HMAC-SHA256(secret_key, salt), 32 bytes
  - mode = AES-256-CBC with PKCS7 padding

The format is interchangeable with values produced by CryptoJS
(PBKDF2 keySize 256/32, Pkcs7, CBC) so existing encrypted env files keep working.
"""
import base64
import binascii
import logging
import os

from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from utils.config import load_config, get_pbkdf2_iterations, get_salt_bytes

logger = logging.getLogger(__name__)

CONFIG = load_config()
PBKDF2_ITERATIONS = get_pbkdf2_iterations(CONFIG)
SALT_BYTES = get_salt_bytes(CONFIG)
KEY_LENGTH = 32
IV_LENGTH = 16


class DecryptionError(Exception):
    """Raised when a packed ciphertext cannot be decrypted."""


def generate_salt(length: int = SALT_BYTES) -> str:
    """Random salt as a hex string."""
    return os.urandom(length).hex()


def _derive_key(secret_key: str, salt: bytes) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(secret_key.encode("utf-8"))


def encrypt(text: str, secret_key: str) -> str:
    """
    Encrypt plaintext with a fresh random salt and IV.

    Returns:
        The packed "salt:iv:ciphertext" string.
    """
    salt = generate_salt()
    iv = os.urandom(IV_LENGTH).hex()
    key = _derive_key(secret_key, bytes.fromhex(salt))

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(text.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(bytes.fromhex(iv))).encryptor()
    cipher_bytes = encryptor.update(padded) + encryptor.finalize()
    cipher_text = base64.b64encode(cipher_bytes).decode("ascii")

    return f"{salt}:{iv}:{cipher_text}"


def decrypt(cipher_text: str, secret_key: str) -> str:
    """
    Decrypt a packed "salt:iv:ciphertext" string.

    Raises:
        DecryptionError: empty input, malformed packing, wrong key or corrupt data.
    """
    if not cipher_text:
        raise DecryptionError("cipherText is undefined or empty.")

    parts = cipher_text.split(":")
    if len(parts) != 3:
        logger.error("Invalid cipherText format. Expected format: salt:iv:encrypted")
        raise DecryptionError("Invalid cipherText format. Expected format: salt:iv:encrypted")

    salt, iv, encrypted = parts
    try:
        key = _derive_key(secret_key, bytes.fromhex(salt))
        decryptor = Cipher(algorithms.AES(key), modes.CBC(bytes.fromhex(iv))).decryptor()
        padded = decryptor.update(base64.b64decode(encrypted, validate=True)) + decryptor.finalize()

        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        decrypted = (unpadder.update(padded) + unpadder.finalize()).decode("utf-8")
    except (ValueError, binascii.Error, UnicodeDecodeError) as e:
        raise DecryptionError("Decryption failed. Invalid key or ciphertext.") from e

    if not decrypted:
        raise DecryptionError("Decryption failed. Invalid key or ciphertext.")
    return decrypted
