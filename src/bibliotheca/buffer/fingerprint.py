"""Content fingerprints used as a cheap equality oracle for dirty tracking."""

from __future__ import annotations

import base64
import hashlib

ENCODING = "utf-8"


def fingerprint(content: str) -> str:
    """Return a base64 MD5 digest of ``content`` exactly as it will be written.

    Line endings are hashed verbatim; callers must pass the text form that
    goes to disk, not a per-line model. Not suitable for security use.
    """

    digest = hashlib.md5(
        content.encode(ENCODING, errors="surrogatepass"), usedforsecurity=False
    ).digest()
    return base64.b64encode(digest).decode("ascii")


__all__ = ["fingerprint"]
