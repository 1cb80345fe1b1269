"""
Null-safe access to before/after state payloads.

Payload schemas are not fixed: each entity type, and each generation of
writer, stores different keys. States may arrive as dicts, as JSON-encoded
strings, or nested under a legacy ``metadata`` wrapper. Everything here
returns a dict or a primitive and never raises.
"""

import json
import logging

from core.constants import AuditDisplay

logger = logging.getLogger(__name__)

_PRIMITIVES = (str, int, float, bool)


def decode_state(value):
    """Return a dict for any stored state; None, garbage and non-objects become {}"""
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, (str, bytes, bytearray)):
        if not value:
            return {}
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            logger.debug("Unparseable payload dropped: %.80r", value)
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


def extract_states(before_state, after_state, metadata):
    """
    Resolve (before, after) from the record columns.

    The legacy metadata wrapper wins when it carries a state, matching how
    the trigger-era rows were written.
    """
    wrapper = decode_state(metadata)
    before = decode_state(wrapper.get('old_values')) or decode_state(before_state)
    after = decode_state(wrapper.get('new_values')) or decode_state(after_state)
    return before, after


def get_value(bag, key):
    """Primitive value for key, or None for missing keys and nested structures"""
    if not isinstance(bag, dict):
        return None
    value = bag.get(key)
    if value is None or isinstance(value, _PRIMITIVES):
        return value
    return None


def get_text(bag, key):
    """Non-empty string value for key, or None"""
    value = get_value(bag, key)
    if isinstance(value, bool) or value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    if not value or value in ('null', AuditDisplay.EMPTY):
        return None
    return value


def first_text(*candidates):
    """First non-empty text among (bag, key) pairs"""
    for bag, key in candidates:
        value = get_text(bag, key)
        if value:
            return value
    return None


def is_identifier(value):
    """UUID-shaped strings only; guards against free-text fields that look like ids"""
    return isinstance(value, str) and len(value) == AuditDisplay.IDENTIFIER_LENGTH


def get_identifier(bag, key):
    """Value for key if it is shaped like an identifier"""
    value = get_value(bag, key)
    return value if is_identifier(value) else None


def first_identifier(*candidates):
    """First identifier-shaped value among (bag, key) pairs"""
    for bag, key in candidates:
        value = get_identifier(bag, key)
        if value:
            return value
    return None


def get_flag(bag, key):
    """Truthiness of key, accepting the string spellings some writers used"""
    value = get_value(bag, key)
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes')
    return bool(value)
