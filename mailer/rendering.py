"""
Ticket email templates and placeholder substitution.
"""
import re

DEFAULT_EMAIL_TEMPLATE = """<!doctype html>
<p>Hi {{name}},</p>
<p>Here are your ticket details for <strong>{{event}}</strong>:</p>
<ul>
  <li><strong>Seat:</strong> {{seat}}</li>
  <li><strong>Ticket Code:</strong> {{ticket_code}}</li>
  <li><strong>Starts:</strong> {{event_starts}}</li>
</ul>
<p>Present this QR code at the entrance:</p>
<p><img src="cid:{{qr_cid}}" alt="Ticket QR Code" style="max-width:240px;" /></p>
<p>If you have any questions, reply to this email. See you there!</p>"""

DEFAULT_SUBJECT_TEMPLATE = "Your Ticket for {{event}}"

PLACEHOLDER_RE = re.compile(r"{{\s*(\w+)\s*}}")


def interpolate_template(template, data):
    """
    Replace ``{{key}}`` markers (case-insensitive, inner whitespace allowed).
    Unknown keys are replaced with an empty string, not left in place.
    """
    def replace(match):
        value = data.get(match.group(1).lower())
        return "" if value is None else str(value)

    return PLACEHOLDER_RE.sub(replace, template)


def normalise_recipient(entry):
    """
    Accept ``"a@b.c"`` or ``{"email": ..., "name": ...}``. Returns
    ``{"email", "name"}`` or None for anything unusable.
    """
    if not entry:
        return None
    if isinstance(entry, str):
        email = entry.strip()
        return {"email": email, "name": ""} if email else None
    if isinstance(entry, dict):
        email = entry.get("email")
        if isinstance(email, str) and email.strip():
            name = entry.get("name")
            return {
                "email": email.strip(),
                "name": name.strip() if isinstance(name, str) else "",
            }
    return None


def pick_template(value, default):
    return value if isinstance(value, str) and value.strip() else default
