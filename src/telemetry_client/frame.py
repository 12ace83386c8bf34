"""Frame encoding for the collector wire protocol.

One frame per event:

    <label> <json>\\n

The collector splits on the first space and on newlines, so the label
must be a single non-blank token and the JSON must not contain a raw
newline (json.dumps never emits one without ``indent``).
"""

from __future__ import annotations

import json
from typing import Any, Callable, Union

from .errors import EncodingException


Payload = Any
PayloadOrSupplier = Union[Payload, Callable[[], Payload]]

ENCODING = "utf-8"


def resolve_payload(data: PayloadOrSupplier) -> Payload:
    """Evaluate a zero-argument supplier once, or return the value as is."""
    if callable(data):
        return data()
    return data


def _check_label(label: str) -> None:
    if not label:
        raise ValueError("label must not be empty")
    for ch in label:
        if ch.isspace() or not ch.isprintable():
            raise ValueError(f"label contains whitespace or control character: {label!r}")


def encode_frame(label: Any, payload: Payload) -> bytes:
    """
    Encode an event as a newline-terminated UTF-8 frame.

    Raises:
        EncodingException: payload is not JSON-serializable (unsupported
            type, circular reference, nesting too deep, NaN/Infinity),
            the label cannot be converted to a single token, or the text
            cannot be encoded as UTF-8.
    """
    try:
        label = str(label)
        _check_label(label)
        body = json.dumps(payload, ensure_ascii=False, allow_nan=False)
        return f"{label} {body}\n".encode(ENCODING)
    except (TypeError, ValueError, RecursionError) as e:
        # UnicodeEncodeError is a ValueError
        raise EncodingException(e) from e


def decode_frame(line: bytes | str) -> tuple[str, Payload]:
    """
    Parse one frame back into ``(label, payload)``.

    Accepts bytes or text, with or without the trailing newline.
    """
    try:
        if isinstance(line, bytes):
            line = line.decode(ENCODING)
        line = line.rstrip("\n")
        label, sep, body = line.partition(" ")
        if not sep or not label:
            raise ValueError(f"malformed frame: {line!r}")
        return label, json.loads(body)
    except (ValueError, RecursionError) as e:
        # covers UnicodeDecodeError and JSONDecodeError
        raise EncodingException(e) from e
