"""Fast JSON encoding and decoding for project documents."""

from typing import Any

import msgspec
import orjson


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


_decoder = msgspec.json.Decoder()


def loads_object(text: str | bytes) -> dict[str, Any]:
    """
    Decode a JSON document whose top level must be an object.

    Args:
        text: JSON text

    Returns:
        Parsed dictionary

    Raises:
        JSONParseError: If the text is not valid JSON or not an object
    """
    try:
        data = text.encode("utf-8") if isinstance(text, str) else text
        result = _decoder.decode(data)
    except UnicodeEncodeError as e:
        raise JSONParseError(f"Invalid text encoding: {e.reason}", e) from e
    except msgspec.DecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected JSON object, got {type(result).__name__}")
    return result


def dumps_pretty(obj: Any) -> str:
    """
    Encode object as indented JSON (2 spaces, key order preserved).

    Args:
        obj: JSON-compatible object

    Returns:
        JSON string
    """
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
