"""
Tamper-evident ticket tokens.

A signed token is ``{"p": payload, "sig": hex}`` where ``sig`` is
HMAC-SHA256 over the compact JSON of ``payload`` in its own key order, UTF-8.
The bytes hashed on verify are the payload exactly as it arrived, so a token
whose payload keys were reordered no longer verifies.
"""
import hashlib
import hmac
import json
import re

from django.conf import settings

SIGNATURE_RE = re.compile(r"[0-9a-f]{64}")


def canonical_json(payload):
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class TicketSigner:
    """
    Signs and verifies ticket payloads with a server-held secret.

    Rotating the secret invalidates every token signed with the previous one,
    including tickets that have not been scanned yet.
    """

    def __init__(self, secret):
        if not secret:
            raise ValueError("A signing secret is required")
        self._key = secret.encode("utf-8") if isinstance(secret, str) else bytes(secret)

    def signature(self, payload):
        return hmac.new(self._key, canonical_json(payload), hashlib.sha256).hexdigest()

    def sign(self, payload):
        return {"p": payload, "sig": self.signature(payload)}

    def verify(self, signed):
        """
        True only for a well-formed token whose signature matches its payload.
        Fails closed on anything else.
        """
        if not isinstance(signed, dict):
            return False
        payload = signed.get("p")
        sig = signed.get("sig")
        if not isinstance(payload, dict) or not payload:
            return False
        if not isinstance(sig, str) or not SIGNATURE_RE.fullmatch(sig):
            return False
        try:
            expected = self.signature(payload)
        except (TypeError, ValueError):
            return False
        return hmac.compare_digest(expected, sig)


def default_signer():
    return TicketSigner(settings.QR_SECRET)
