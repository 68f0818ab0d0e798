import base64

import pytest
from cryptography.exceptions import InvalidTag
from shared.crypto import EncryptionKeyError, decrypt, encrypt, generate_encryption_key, mask_secret


class TestEncryption:
    def test_round_trip(self):
        assert decrypt(encrypt("msg91-auth-key")) == "msg91-auth-key"

    def test_fresh_iv_per_encryption(self):
        assert encrypt("same") != encrypt("same")

    def test_envelope_layout(self):
        # 12-byte IV + ciphertext + 16-byte tag
        assert len(base64.b64decode(encrypt("abcd"))) == 12 + 4 + 16

    def test_wrong_key_fails(self):
        sealed = encrypt("secret")
        with pytest.raises(InvalidTag):
            decrypt(sealed, key=generate_encryption_key())

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("CREDENTIALS_ENCRYPTION_KEY")
        with pytest.raises(EncryptionKeyError, match="not set"):
            encrypt("secret")

    def test_short_key(self):
        with pytest.raises(EncryptionKeyError, match="32 bytes"):
            encrypt("secret", key=base64.b64encode(b"too-short").decode())


def test_generated_key_is_32_bytes():
    assert len(base64.b64decode(generate_encryption_key())) == 32


@pytest.mark.parametrize(
    "value, expected",
    [("abcd1234", "••••••••1234"), ("abc", "••••••••"), (None, "••••••••")],
)
def test_mask_secret(value, expected):
    assert mask_secret(value) == expected
