#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Payload helpers shared by all parsers

Every helper either returns a value of the requested shape or raises
DecodeError, so parsers never index into unchecked data.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, Mapping, Optional

from ..errors import DecodeError


def match_topic(pattern: re.Pattern[str], topic: str) -> Optional[re.Match[str]]:
    """
    Match topic against parser pattern (anchored at start only)

    A named segment that matched empty (e.g. "home/temp/") counts as a
    mismatch: an empty identifier cannot be stored as a tag.
    """
    m = pattern.match(topic)
    if m is None or not all(m.groupdict().values()):
        return None
    return m


def decode_text(payload: Any) -> str:
    if isinstance(payload, (bytes, bytearray)):
        try:
            return bytes(payload).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("Payload is not valid UTF-8: %s" % e) from e
    return str(payload)


def parse_float(payload: Any) -> float:
    """
    Tolerant float parse of a bare literal

    Examples:
        parse_float(b" 21.5\\n") -> 21.5
        parse_float(b"abc")       -> DecodeError
    """
    s = decode_text(payload).strip()
    try:
        value = float(s)
    except ValueError:
        raise DecodeError("Not a number: %r" % s) from None
    if not math.isfinite(value):
        raise DecodeError("Not a finite number: %r" % s)
    return value


def _reject_constant(name: str) -> Any:
    # json accepts NaN, Infinity and -Infinity by default
    raise DecodeError("Non-finite number %s in JSON" % name)


def decode_json_object(payload: Any) -> Dict[str, Any]:
    text = decode_text(payload)
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except DecodeError:
        raise
    except ValueError as e:
        raise DecodeError("Malformed JSON: %s" % e) from e
    if not isinstance(data, dict):
        raise DecodeError("Expected JSON object, got %s" % type(data).__name__)
    return data


def require_object(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise DecodeError("Missing object %r" % key)
    return value


def require_number(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    # bool is an int subclass, but never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError("Missing numeric %r (got %r)" % (key, value))
    if not math.isfinite(value):
        raise DecodeError("Non-finite numeric %r (got %r)" % (key, value))
    return float(value)


def require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodeError("Missing string %r (got %r)" % (key, value))
    return value


def passthrough_value(text: str) -> Any:
    """Float when the text reads as a finite number, the text itself otherwise"""
    try:
        value = float(text.strip())
    except ValueError:
        return text
    return value if math.isfinite(value) else text
