#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from .base import Parser
from .values import decode_json_object, match_topic
from ..errors import DecodeError
from ..models import MetricRecord

logger = logging.getLogger(__name__)

TOPIC_RE = re.compile(r"^[a-zA-Z0-9]*/(?P<group>[a-zA-Z0-9]*)/(?P<name>[a-zA-Z0-9_/]*)")

# zigbee2mqtt/bridge/* carries bridge state and logs, not device readings
SKIP_GROUP = "bridge"


def flatten_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Keep top-level scalars of a zigbee2mqtt JSON object

    Numbers and booleans become floats so one field never changes type
    between messages; nested objects, arrays and nulls are skipped.

    Example:
        {"temperature": 21, "occupancy": true, "update": {...}}
          -> {"temperature": 21.0, "occupancy": 1.0}
    """
    fields: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, (bool, int, float)):
            fields[key] = float(value)
        elif isinstance(value, str):
            fields[key] = value
        else:
            logger.debug("Skipping non-scalar field %r", key)
    return fields


class Zigbee2MqttParser(Parser):
    """zigbee2mqtt device state: <prefix>/<group>/<name> with a JSON object"""

    @property
    def kind(self) -> str:
        return "zigbee2mqtt"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(TOPIC_RE, topic)
        if m is None:
            logger.debug("Topic %r is not a zigbee2mqtt device topic", topic)
            return None

        group, name = m.group("group"), m.group("name")
        if group == SKIP_GROUP:
            logger.debug("Skipping bridge")
            return None

        fields = flatten_fields(decode_json_object(payload))
        if not fields:
            raise DecodeError("No scalar values in zigbee2mqtt payload on %r" % topic)

        return MetricRecord(
            measurement="zigbee2mqtt",
            tags={"group": group, "name": name},
            fields=fields,
        )
