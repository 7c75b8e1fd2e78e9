"""
Response normalizer - Single chokepoint for wallet reply shapes.

Wallets are not uniform in what sign-and-send returns. Supported shapes,
resolved in order:

1. Sequence: element 0, or element 0's ``signature`` field when it is a record
2. Record: its ``signature`` field, else element 0's ``signature`` field
3. Plain string: used as is

Raw signature bytes are base58-encoded. Anything else, or an empty
result, raises NoSignatureError.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import base58

from passerelle.domain.exceptions import NoSignatureError

SIGNATURE_FIELD = "signature"


def normalize(raw_response: Any) -> str:
    """
    Map a wallet signing response to the canonical transaction id.

    Args:
        raw_response: Wallet reply (sequence, record or string)

    Returns:
        Canonical transaction identifier

    Raises:
        NoSignatureError: If no identifier can be resolved
    """
    return _as_identifier(_resolve(raw_response))


def _resolve(raw: Any) -> Any:
    if _is_sequence(raw):
        if not raw:
            return None
        first = raw[0]
        if isinstance(first, Mapping) and SIGNATURE_FIELD in first:
            return first[SIGNATURE_FIELD]
        return first

    if isinstance(raw, Mapping):
        if SIGNATURE_FIELD in raw:
            return raw[SIGNATURE_FIELD]
        first = raw.get(0)
        if isinstance(first, Mapping):
            return first.get(SIGNATURE_FIELD)
        return None

    return raw


def _as_identifier(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        if not value:
            raise NoSignatureError()
        return base58.b58encode(bytes(value)).decode("ascii")

    if isinstance(value, str) and value.strip():
        return value.strip()

    raise NoSignatureError()


def _is_sequence(raw: Any) -> bool:
    return isinstance(raw, Sequence) and not isinstance(
        raw, (str, bytes, bytearray)
    )
