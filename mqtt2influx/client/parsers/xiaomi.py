#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, Dict, Optional

from .base import Parser
from .values import decode_text, match_topic, passthrough_value
from ..models import MetricRecord

logger = logging.getLogger(__name__)

# Output of aqara-mqtt (https://github.com/monster1025/aqara-mqtt)
TOPIC_RE = re.compile(
    r"^(?P<prefix>[a-zA-Z0-9]*)/(?P<type>[a-zA-Z0-9_.]*)/(?P<id>[a-zA-Z0-9]*)/(?P<sensor>[a-zA-Z0-9]*)"
)


class MagnetPolicy(str, Enum):
    """
    How door/window magnet status strings map to numbers

    Both mappings exist in deployed databases, so the choice is explicit.
    """

    OPEN_IS_ONE = "open_is_one"
    OPEN_IS_ZERO = "open_is_zero"


DEFAULT_MAGNET_POLICY = MagnetPolicy.OPEN_IS_ONE

# Devices without a numeric mapping yet; nothing to store for them
UNMAPPED = {
    ("sensor_switch.aq2", "status"),
    ("gateway", "rgb"),
}

# Sensors whose status string is mapped to a number and kept in the "raw" tag
RAW_TAGGED = {
    ("magnet", "status"),
    ("motion", "status"),
}


class XiaomiParser(Parser):
    """
    Parser for aqara-mqtt topics: <prefix>/<type>/<id>/<sensor>

    magnet/status and motion/status are turned into 1/0/-1 and keep the
    payload text in the "raw" tag; other sensors pass the payload through.
    """

    def __init__(self, magnet_policy: MagnetPolicy = DEFAULT_MAGNET_POLICY) -> None:
        self._magnet_policy = MagnetPolicy(magnet_policy)

    @property
    def kind(self) -> str:
        return "xiaomi"

    @property
    def magnet_policy(self) -> MagnetPolicy:
        return self._magnet_policy

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(TOPIC_RE, topic)
        if m is None:
            logger.debug("Topic %r is not a xiaomi sensor topic", topic)
            return None

        tags = {"type": m.group("type"), "id": m.group("id"), "sensor": m.group("sensor")}
        text = decode_text(payload)
        logger.info(
            "xiaomi type:%s id:%s sensor:%s - value:%s", tags["type"], tags["id"], tags["sensor"], text
        )

        key = (tags["type"], tags["sensor"])
        if key in UNMAPPED:
            logger.debug("No value mapping for xiaomi %s/%s", *key)
            return None

        fields: Dict[str, Any] = {}
        if key == ("magnet", "status"):
            fields["value"] = self._magnet_value(text)
        elif key == ("motion", "status"):
            fields["value"] = _motion_value(text)
        else:
            fields["value"] = passthrough_value(text)

        # empty tag values are never stored
        if key in RAW_TAGGED and text:
            tags["raw"] = text

        return MetricRecord(measurement="xiaomi", tags=tags, fields=fields)

    def _magnet_value(self, text: str) -> float:
        if text == "open":
            return 1.0 if self._magnet_policy is MagnetPolicy.OPEN_IS_ONE else 0.0
        if text == "close":
            return 0.0 if self._magnet_policy is MagnetPolicy.OPEN_IS_ONE else 1.0
        return -1.0


def _motion_value(text: str) -> float:
    if text == "motion":
        return 1.0
    if text == "no_motion":
        return 0.0
    return -1.0
