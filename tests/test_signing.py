"""Unit tests for ticket token signing and QR rendering."""

import base64
import json

import pytest

from tickets.qr import qr_data_url, token_text
from tickets.signing import TicketSigner, canonical_json

PAYLOAD = {
    "ticket_id": "6f1c2b9e-2f4a-4a57-9d0b-3c8a9a0e1f22",
    "event_id": "0d7e4f59-8e3b-4c0b-a3a1-1b2c3d4e5f60",
    "seat_id": "a9b8c7d6-e5f4-4321-8765-0fedcba98765",
    "issued_at": "2026-10-19T18:30:00+00:00",
    "nonce": "d2f1c0b9-a8e7-4d6c-b5a4-938271605f4e",
}


class TestCanonicalJson:

    def test_keys_keep_their_order_without_whitespace(self):
        assert canonical_json({"b": 1, "a": [1, 2]}) == b'{"b":1,"a":[1,2]}'

    def test_non_ascii_is_utf8_encoded(self):
        assert canonical_json({"name": "Zoë"}) == '{"name":"Zoë"}'.encode("utf-8")


class TestTicketSigner:

    def test_sign_then_verify(self, signer):
        signed = signer.sign(PAYLOAD)
        assert signed["p"] == PAYLOAD
        assert len(signed["sig"]) == 64
        assert signer.verify(signed) is True

    def test_signature_is_deterministic(self, signer):
        assert signer.sign(PAYLOAD)["sig"] == signer.sign(dict(PAYLOAD))["sig"]

    def test_reordered_keys_are_rejected(self, signer):
        signed = signer.sign(PAYLOAD)
        reordered = {"sig": signed["sig"], "p": dict(reversed(list(PAYLOAD.items())))}
        assert signer.verify(reordered) is False

    def test_survives_json_round_trip(self, signer):
        signed = signer.sign(PAYLOAD)
        assert signer.verify(json.loads(token_text(signed))) is True

    @pytest.mark.parametrize("field,value", [
        ("ticket_id", "00000000-0000-0000-0000-000000000000"),
        ("nonce", "tampered"),
        ("issued_at", "2030-01-01T00:00:00+00:00"),
    ])
    def test_payload_tampering_is_rejected(self, signer, field, value):
        signed = signer.sign(PAYLOAD)
        signed["p"] = {**signed["p"], field: value}
        assert signer.verify(signed) is False

    def test_signature_tampering_is_rejected(self, signer):
        signed = signer.sign(PAYLOAD)
        flipped = "0" if signed["sig"][0] != "0" else "1"
        signed["sig"] = flipped + signed["sig"][1:]
        assert signer.verify(signed) is False

    def test_other_secret_is_rejected(self, signer):
        signed = TicketSigner("another-secret").sign(PAYLOAD)
        assert signer.verify(signed) is False

    @pytest.mark.parametrize("candidate", [
        None,
        "string",
        [],
        {},
        {"p": PAYLOAD},
        {"sig": "abc"},
        {"p": {}, "sig": "abc"},
        {"p": "not-a-dict", "sig": "abc"},
        {"p": PAYLOAD, "sig": 123},
        {"p": PAYLOAD, "sig": ""},
        {"p": PAYLOAD, "sig": "é" * 64},
        {"p": PAYLOAD, "sig": "\ud800"},
        {"p": PAYLOAD, "sig": "A" * 64},
        {"p": PAYLOAD, "sig": "0" * 63},
        {"p": {"name": "\ud800"}, "sig": "0" * 64},
    ])
    def test_malformed_tokens_fail_closed(self, signer, candidate):
        assert signer.verify(candidate) is False

    def test_empty_secret_is_refused(self):
        with pytest.raises(ValueError):
            TicketSigner("")


class TestQrRendering:

    def test_data_url_holds_png(self, signer):
        url = qr_data_url(signer.sign(PAYLOAD))
        prefix = "data:image/png;base64,"
        assert url.startswith(prefix)
        assert base64.b64decode(url[len(prefix):]).startswith(b"\x89PNG")
