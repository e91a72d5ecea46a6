"""
Canonical sign-byte encoding for bridge messages.

The remote verifier recomputes the signature pre-image with Go's
``encoding/json``, so the output here must match it byte for byte:
compact separators, keys in declared field order, raw UTF-8 and the
HTML-safe escapes Go applies to every string.

The target is Go 1.13 (the verifier's toolchain). Before Go 1.22 the
encoder had no short forms for backspace and form feed and wrote them as
``\\u0008`` and ``\\u000c``, so those are rewritten here as well.
"""

import json
import logging
import re
from typing import Any

from ..errors import EncodingDefect

logger = logging.getLogger(__name__)

# Go escapes these inside strings even though JSON does not require it.
_GO_HTML_ESCAPES: dict[str, str] = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

# Python's short escapes that Go 1.13 spells out. Escaped backslashes are
# matched too so that a literal backslash followed by "b" is left alone.
_GO_SHORT_ESCAPES: dict[str, str] = {
    "\\b": "\\u0008",
    "\\f": "\\u000c",
    "\\\\": "\\\\",
}
_SHORT_ESCAPE_RE = re.compile(r"\\[bf\\]")


class SignEncoder:
    """Utilities for rendering message payloads to canonical bytes."""

    @staticmethod
    def to_json(payload: dict[str, Any]) -> str:
        """
        Serialize a payload dict to Go-compatible compact JSON.

        Key order is the dict's insertion order, which callers build in
        wire field order. Never sorts.

        Args:
            payload: Mapping of JSON keys to JSON-compatible values

        Returns:
            Compact JSON text

        Raises:
            TypeError: If a value is not JSON serializable
            ValueError: If a float is NaN or infinite
        """
        text = json.dumps(
            payload,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        # Structural JSON never contains these characters, only strings do.
        for char, escape in _GO_HTML_ESCAPES.items():
            if char in text:
                text = text.replace(char, escape)
        if "\\" in text:
            text = _SHORT_ESCAPE_RE.sub(lambda m: _GO_SHORT_ESCAPES[m.group(0)], text)
        return text

    @staticmethod
    def sign_bytes(payload: dict[str, Any], msg_type: str) -> bytes:
        """
        Render a message payload to the bytes a signature is computed over.

        Args:
            payload: Wire-ordered payload from the message's ``to_dict``
            msg_type: Message type discriminator, used for diagnostics

        Returns:
            UTF-8 encoded canonical JSON

        Raises:
            EncodingDefect: If the payload cannot be serialized
        """
        try:
            encoded = SignEncoder.to_json(payload).encode("utf-8")
        except (TypeError, ValueError) as e:
            logger.critical(f"Cannot encode {msg_type} sign bytes: {e}")
            raise EncodingDefect(f"{msg_type} sign bytes: {e}") from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"{msg_type} sign bytes ({len(encoded)} bytes): {encoded.decode('utf-8')}")
        return encoded
