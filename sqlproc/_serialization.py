"""JSON encoding used by the structured log formatter."""

from typing import Any

import msgspec

__all__ = ("decode_json", "encode_json")

_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder()


def _default(value: Any) -> Any:
    return str(value)


def encode_json(data: Any) -> str:
    """Encode ``data`` as a JSON string.

    Values msgspec cannot encode natively are rendered with ``str()``.
    """
    try:
        return _encoder.encode(data).decode("utf-8")
    except TypeError:
        return msgspec.json.encode(data, enc_hook=_default).decode("utf-8")


def decode_json(data: "str | bytes") -> Any:
    return _decoder.decode(data)
