"""Tests for the packed AES format used in encrypted env files."""

import base64

import pytest

from utils.crypto_utils import DecryptionError, decrypt, encrypt, generate_salt

SECRET = "0f" * 32


def test_encrypt_produces_salt_iv_ciphertext():
    packed = encrypt("s3cret-password", SECRET)

    salt, iv, cipher_text = packed.split(":")
    assert len(bytes.fromhex(salt)) == 16
    assert len(bytes.fromhex(iv)) == 16
    # AES block aligned
    assert len(base64.b64decode(cipher_text)) % 16 == 0


def test_decrypt_recovers_plaintext():
    packed = encrypt("user@example.com", SECRET)

    assert decrypt(packed, SECRET) == "user@example.com"


def test_unicode_plaintext():
    assert decrypt(encrypt("pässwörd ✓", SECRET), SECRET) == "pässwörd ✓"


def test_same_plaintext_encrypts_differently_each_time():
    assert encrypt("value", SECRET) != encrypt("value", SECRET)


def test_generate_salt_is_hex_of_requested_length():
    assert len(bytes.fromhex(generate_salt(8))) == 8


@pytest.mark.parametrize("cipher_text", ["", None])
def test_empty_input_is_rejected(cipher_text):
    with pytest.raises(DecryptionError, match="undefined or empty"):
        decrypt(cipher_text, SECRET)


@pytest.mark.parametrize("cipher_text", ["only-one-part", "a:b", "a:b:c:d"])
def test_wrong_number_of_parts_is_rejected(cipher_text):
    with pytest.raises(DecryptionError, match="Invalid cipherText format"):
        decrypt(cipher_text, SECRET)


def test_non_hex_salt_is_rejected():
    _, iv, cipher_text = encrypt("value", SECRET).split(":")

    with pytest.raises(DecryptionError):
        decrypt(f"zz:{iv}:{cipher_text}", SECRET)


def test_corrupt_ciphertext_is_rejected():
    salt, iv, _ = encrypt("value", SECRET).split(":")

    with pytest.raises(DecryptionError):
        decrypt(f"{salt}:{iv}:not base64!", SECRET)


def test_wrong_key_fails():
    packed = encrypt("a fairly long value to decrypt", SECRET)

    with pytest.raises(DecryptionError):
        decrypt(packed, "another-key")


def test_empty_plaintext_cannot_be_decrypted():
    with pytest.raises(DecryptionError):
        decrypt(encrypt("", SECRET), SECRET)
