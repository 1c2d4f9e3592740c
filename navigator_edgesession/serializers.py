"""StateValue (de)serialization for store payloads."""
import logging
from typing import Any, Union

import orjson

logger = logging.getLogger("navigator.edgesession")

JsonValue = Union[str, int, float, bool, dict, list]
StateValue = JsonValue


def serialize(value: StateValue) -> str:
    """Encode a StateValue as a JSON string.

    Raises:
        TypeError: value is not JSON serializable.
    """
    try:
        return orjson.dumps(value).decode("utf-8")
    except orjson.JSONEncodeError as err:
        raise TypeError(
            f"Session value of type {type(value).__name__} is not serializable"
        ) from err


def deserialize(payload: Any) -> Any:
    """Decode a store payload back into a StateValue.

    Structured payloads (some backends return them already decoded) pass
    through. A string that is not valid JSON is returned as is.
    """
    if payload is None:
        return None
    if isinstance(payload, (bytes, bytearray, memoryview)):
        payload = bytes(payload).decode("utf-8", errors="replace")
    if not isinstance(payload, str):
        return payload
    try:
        return orjson.loads(payload)
    except orjson.JSONDecodeError:
        logger.debug("Session payload is not JSON, returning raw string")
        return payload
