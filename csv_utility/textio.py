"""
Decoding of CSV bytes read from disk or uploaded.

Rules:
- Detect encoding best-effort via charset-normalizer.
- A UTF-8 BOM is stripped so it never ends up in the first header cell.
- If decode fails, fall back to UTF-8 with replacement characters and report it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from charset_normalizer import from_bytes

_UTF8_BOM = b"\xef\xbb\xbf"


@dataclass
class DecodedText:
    text: str
    detected: Optional[str]
    decode_used: str
    fallback: bool

    def report(self) -> Dict[str, Any]:
        return {
            "detected": self.detected,
            "decode_used": self.decode_used,
            "decode_fallback": self.fallback,
        }


def _is_utf8(name: str) -> bool:
    return name.lower().replace("-", "_") in ("utf_8", "utf8")


def decode_csv_bytes(raw: bytes) -> DecodedText:
    if not raw:
        return DecodedText(text="", detected=None, decode_used="utf-8", fallback=False)

    detected = None
    if raw.startswith(_UTF8_BOM):
        detected = "utf_8"
    else:
        match = from_bytes(raw).best()
        if match is not None:
            detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and _is_utf8(decode_used):
        decode_used = "utf-8-sig"

    fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8")
            decode_used = "utf-8"
        except UnicodeDecodeError:
            # Last resort: decode with replacement so loading still completes
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"
        fallback = True

    return DecodedText(text=text, detected=detected, decode_used=decode_used, fallback=fallback)
