"""Tests for key generation models."""

from pathlib import Path

from keygen_operations.lib.models import KeyFilePair, KeyPairResult


class TestKeyFilePair:
    """Tests for KeyFilePair.from_location()."""

    def test_derives_public_key_path(self) -> None:
        """Public key lives next to the private key with a .pub suffix."""
        pair = KeyFilePair.from_location("/tmp/test_id_rsa")

        assert pair.private_key_path == Path("/tmp/test_id_rsa")
        assert pair.public_key_path == Path("/tmp/test_id_rsa.pub")

    def test_suffix_is_appended_not_replaced(self) -> None:
        """Existing extensions are kept, .pub is appended."""
        pair = KeyFilePair.from_location(Path("/keys/deploy.key"))

        assert pair.public_key_path == Path("/keys/deploy.key.pub")

    def test_iterates_private_then_public(self) -> None:
        """Iteration yields private key path first."""
        pair = KeyFilePair.from_location("/tmp/k")

        assert list(pair) == [Path("/tmp/k"), Path("/tmp/k.pub")]


class TestKeyPairResult:
    """Tests for KeyPairResult serialisation."""

    def test_to_dict_uses_key_and_pub_key_names(self) -> None:
        """Serialised result uses key/pubKey field names."""
        result = KeyPairResult(private_key="priv", public_key="pub")

        assert result.to_dict() == {"key": "priv", "pubKey": "pub"}
