"""Tests for HMAC signing and callback verification."""

import hashlib
import hmac

import pytest

from mmpay import generate_signature, verify_callback, verify_signature

from conftest import SECRET_KEY

PAYLOAD = '{"status":"SUCCESS","amount":1000}'
NONCE = "123456789"


def _reference_signature(payload: str, nonce: str, secret: str = SECRET_KEY) -> str:
    return hmac.new(
        secret.encode("utf-8"), f"{nonce}.{payload}".encode("utf-8"), hashlib.sha256
    ).hexdigest()


class TestGenerateSignature:
    def test_matches_hmac_sha256_of_nonce_dot_body(self) -> None:
        assert generate_signature(PAYLOAD, NONCE, SECRET_KEY) == _reference_signature(PAYLOAD, NONCE)

    def test_is_lowercase_hex(self) -> None:
        signature = generate_signature(PAYLOAD, NONCE, SECRET_KEY)
        assert len(signature) == 64
        assert signature == signature.lower()
        int(signature, 16)

    def test_is_deterministic(self) -> None:
        first = generate_signature(PAYLOAD, NONCE, SECRET_KEY)
        second = generate_signature(PAYLOAD, NONCE, SECRET_KEY)
        assert first == second

    def test_depends_on_every_input(self) -> None:
        base = generate_signature(PAYLOAD, NONCE, SECRET_KEY)
        assert generate_signature(PAYLOAD + " ", NONCE, SECRET_KEY) != base
        assert generate_signature(PAYLOAD, NONCE + "0", SECRET_KEY) != base
        assert generate_signature(PAYLOAD, NONCE, SECRET_KEY + "x") != base

    def test_str_and_bytes_bodies_agree(self) -> None:
        body = '{"name":"ကော်ဖီ"}'
        assert generate_signature(body, NONCE, SECRET_KEY) == generate_signature(
            body.encode("utf-8"), NONCE, SECRET_KEY
        )


class TestVerifySignature:
    def test_accepts_valid_signature(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE)
        assert verify_signature(PAYLOAD, NONCE, signature, SECRET_KEY) is True

    def test_accepts_raw_bytes_payload(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE)
        assert verify_signature(PAYLOAD.encode("utf-8"), NONCE, signature, SECRET_KEY) is True

    def test_rejects_tampered_payload(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE)
        assert verify_signature('{"status":"FAILED"}', NONCE, signature, SECRET_KEY) is False

    def test_rejects_other_nonce(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE)
        assert verify_signature(PAYLOAD, "987654321", signature, SECRET_KEY) is False

    def test_rejects_signature_from_other_secret(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE, secret="someone_else")
        assert verify_signature(PAYLOAD, NONCE, signature, SECRET_KEY) is False

    def test_rejects_truncated_signature(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE)
        assert verify_signature(PAYLOAD, NONCE, signature[:-2], SECRET_KEY) is False

    @pytest.mark.parametrize(
        "payload, nonce, signature",
        [
            ("", NONCE, "abc"),
            (PAYLOAD, "", "abc"),
            (PAYLOAD, NONCE, ""),
            (None, NONCE, "abc"),
            (PAYLOAD, None, "abc"),
            (PAYLOAD, NONCE, None),
            (b"", NONCE, "abc"),
        ],
    )
    def test_empty_inputs_short_circuit_to_false(self, payload, nonce, signature) -> None:
        assert verify_signature(payload, nonce, signature, SECRET_KEY) is False

    def test_module_level_helper(self) -> None:
        signature = _reference_signature(PAYLOAD, NONCE)
        assert verify_callback(PAYLOAD, NONCE, signature, secret_key=SECRET_KEY) is True
        assert verify_callback(PAYLOAD, NONCE, "0" * 64, secret_key=SECRET_KEY) is False
