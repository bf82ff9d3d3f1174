"""
Utility functions for the application.
"""
import json
from typing import Any, Dict, List, Optional, Union

# Value stored under a payload key; nested lists/objects are kept as submitted
PayloadValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]
Payload = Dict[str, PayloadValue]


class PayloadError(ValueError):
    """Raised when a submitted payload is not a key/value mapping."""


def normalize_payload(value: Any) -> Optional[Payload]:
    """
    Check that a submitted payload is a key/value mapping.

    Args:
        value: Decoded JSON value from the request body

    Returns:
        The mapping with its values unchanged, or None if no payload was sent

    Raises:
        PayloadError: if the payload is neither null nor a JSON object

    Examples:
        >>> normalize_payload({'temp': 180, 'ok': True})
        {'temp': 180, 'ok': True}
        >>> normalize_payload({'cycles': [1, 2]})
        {'cycles': [1, 2]}
        >>> normalize_payload(None) is None
        True
    """
    if value is None:
        return None
    if not isinstance(value, dict):
        raise PayloadError(f'payload must be an object, got {type(value).__name__}')
    return {str(key): item for key, item in value.items()}


def dump_payload(payload: Optional[Payload]) -> Optional[str]:
    """Serialize a payload for the `data` column (None stays NULL)."""
    if payload is None:
        return None
    return json.dumps(payload, ensure_ascii=False)


def load_payload(text: Optional[str]) -> Optional[Payload]:
    """Deserialize the `data` column."""
    if text is None:
        return None
    return json.loads(text)


def format_value(value: Any) -> str:
    """
    Render a field or payload value for exports.

    Examples:
        >>> format_value(None)
        ''
        >>> format_value(True)
        'oui'
        >>> format_value(12.5)
        '12.5'
        >>> format_value([1, 2])
        '[1, 2]'
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'oui' if value else 'non'
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def payload_items(payload: Any) -> List[tuple]:
    """
    Key/value pairs of a stored payload, for exports.

    Rows written by older clients may hold any JSON value in the `data`
    column; anything that is not a mapping is shown as a single 'Valeur' entry.

    Examples:
        >>> payload_items({'temp': 850})
        [('temp', 850)]
        >>> payload_items(None)
        []
        >>> payload_items([1, 2])
        [('Valeur', [1, 2])]
    """
    if payload is None:
        return []
    if isinstance(payload, dict):
        return list(payload.items())
    return [('Valeur', payload)]
