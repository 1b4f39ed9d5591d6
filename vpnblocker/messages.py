"""Rejection messages and colour-code expansion."""

import re
from collections.abc import Iterable

SECTION_SIGN = "§"

DEFAULT_KICK_MESSAGE = (
    "&cVPNs and proxies are not allowed on this server.",
    "&7Please disable your VPN and try again.",
)

DEFAULT_ERROR_MESSAGE = (
    "&cCould not verify your connection.",
    "&7Please try again later.",
)

_CODE_CHARS = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx"


def colorize(text: str, alt_char: str = "&") -> str:
    """
    Expand ``&``-style colour codes into display codes.

    Only a marker followed by a known code character is translated; the code
    character is lower-cased. Anything else is left as written.

    Example:
        >>> colorize("&cDenied &zok")
        '§cDenied &zok'
    """
    pattern = re.compile(re.escape(alt_char) + f"([{_CODE_CHARS}])")
    return pattern.sub(lambda m: SECTION_SIGN + m.group(1).lower(), text)


def strip_colors(text: str) -> str:
    """Remove expanded display codes, for plain-text logging."""
    return re.sub(SECTION_SIGN + f"[{_CODE_CHARS}]", "", text)


def format_message(lines: Iterable[str], default: Iterable[str]) -> str:
    """
    Join configured lines into one colourised multi-line message.

    Falls back to ``default`` when the configured lines join to blank text.
    """
    message = "\n".join(lines)
    if not message.strip():
        message = "\n".join(default)
    return colorize(message)
