"""Display helpers: contact call/message links and remarks markup."""

import html
import re

from .config import get_settings
from .errors import ValidationError

_SEPARATORS = re.compile(r"[\s-]")
_BOLD = re.compile(r"\*([^*]+)\*")
_ITALIC = re.compile(r"_([^_]+)_")


def normalize_phone(phone_number: str, country_code: str | None = None) -> str:
    """Normalise a stored phone number to international ``+<cc>...`` form.

    Spaces and dashes are dropped. A number already carrying ``+<cc>`` is
    kept; a leading trunk ``0`` is replaced by ``+<cc>``; a truncated
    ``+<first digit of cc>`` prefix is completed; anything else gets
    ``+<cc>`` prepended.

    Args:
        phone_number: Phone number as entered
        country_code: Calling code without ``+`` (defaults to settings)

    Returns:
        Normalised number, e.g. ``+60123456789``
    """
    cc = country_code or get_settings().phone_country_code
    if phone_number is None or not phone_number.strip():
        raise ValidationError("phone_number must not be empty", field="phone_number")

    cleaned = _SEPARATORS.sub("", phone_number)
    prefix = f"+{cc}"

    if cleaned.startswith(prefix):
        return cleaned
    if cleaned.startswith("0"):
        return prefix + cleaned[1:]
    if cleaned.startswith(f"+{cc[0]}"):
        return prefix + cleaned[2:]
    return prefix + cleaned.lstrip("+")


def whatsapp_url(phone_number: str, country_code: str | None = None) -> str:
    """WhatsApp chat link for a phone number."""
    base = get_settings().whatsapp_base_url.rstrip("/")
    digits = normalize_phone(phone_number, country_code).lstrip("+")
    return f"{base}/{digits}"


def tel_url(phone_number: str, country_code: str | None = None) -> str:
    """``tel:`` link for a phone number."""
    return f"tel:{normalize_phone(phone_number, country_code)}"


def render_remarks(text: str | None) -> str:
    """Render remarks as HTML.

    ``*bold*`` and ``_italic_`` become <strong>/<em>, newlines become
    <br>. Everything else is escaped.
    """
    if not text:
        return ""
    escaped = html.escape(text, quote=True).replace("&#x27;", "&#039;")
    escaped = _BOLD.sub(r"<strong>\1</strong>", escaped)
    escaped = _ITALIC.sub(r"<em>\1</em>", escaped)
    return escaped.replace("\n", "<br>")
