# src/cache/fingerprint.py - v3
"""Content fingerprint for (document text, ordered question list).

The digest is SHA-256 over a length-prefixed encoding, so no two distinct
inputs share a byte stream: ``["a", "b"]`` and ``["a\\nb"]`` stay distinct,
as do a question moved into the document and vice versa.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import Any

_FORMAT_TAG = b"docquery-fp-v1"


def compute_fingerprint(document_text: str, questions: Sequence[str]) -> str:
    """Compute the cache key for a normalized request.

    Callers pass already-trimmed values; no normalization happens here, so a
    single changed character always changes the key.

    Args:
        document_text: Trimmed document text.
        questions: Ordered, trimmed, non-blank questions.

    Returns:
        64-character hex digest.
    """
    h = hashlib.sha256(_FORMAT_TAG)
    _update_field(h, document_text)
    h.update(len(questions).to_bytes(4, "big"))
    for question in questions:
        _update_field(h, question)
    return h.hexdigest()


def _update_field(h: Any, value: str) -> None:
    """Feed one length-prefixed UTF-8 field into the hash."""
    data = value.encode("utf-8")
    h.update(len(data).to_bytes(8, "big"))
    h.update(data)
