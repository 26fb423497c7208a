"""Tests for at-rest message encryption."""

from cryptography.fernet import Fernet

from chat.encryption import MessageCipher


class TestMessageCipher:
    def test_disabled_without_key(self):
        cipher = MessageCipher(None)

        assert not cipher.enabled
        assert cipher.encrypt("hello") == "hello"
        assert cipher.decrypt("hello") == "hello"

    def test_encrypts_and_decrypts(self):
        cipher = MessageCipher(Fernet.generate_key())

        stored = cipher.encrypt("hello")

        assert stored != "hello"
        assert cipher.decrypt(stored) == "hello"

    def test_empty_content_stays_empty(self):
        cipher = MessageCipher(Fernet.generate_key())

        assert cipher.encrypt("") == ""
        assert cipher.decrypt("") == ""

    def test_plaintext_passes_through_decrypt(self):
        """
        Why it matters: Rows written before a key was configured must still
        be readable after it is turned on.
        """
        cipher = MessageCipher(Fernet.generate_key())

        assert cipher.decrypt("written before encryption") == "written before encryption"

    def test_rotated_key_returns_raw_value(self):
        stored = MessageCipher(Fernet.generate_key()).encrypt("hello")

        assert MessageCipher(Fernet.generate_key()).decrypt(stored) == stored

    def test_tombstone_content_stays_none(self):
        assert MessageCipher(Fernet.generate_key()).decrypt(None) is None

    def test_from_settings(self, settings):
        key = Fernet.generate_key().decode()
        settings.MESSAGE_ENCRYPTION_KEY = key

        cipher = MessageCipher.from_settings()

        assert cipher.enabled
        assert MessageCipher(key).decrypt(cipher.encrypt("hi")) == "hi"
