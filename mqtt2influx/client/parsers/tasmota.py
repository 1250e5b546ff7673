#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tasmota telemetry parsers

Tasmota publishes everything below tele/<device>/ (SENSOR, STATE, LWT...),
so each parser ignores the sibling topics it is not meant for.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .base import Parser
from .values import decode_json_object, match_topic, require_number, require_object, require_str
from ..models import MetricRecord

logger = logging.getLogger(__name__)

SENSOR_TOPIC_RE = re.compile(r"^tele/(?P<name>[a-zA-Z0-9]*)/SENSOR")
STATE_TOPIC_RE = re.compile(r"^tele/(?P<name>[a-zA-Z0-9]*)/STATE")

POWER_ON = 1
POWER_OFF = 0
POWER_UNKNOWN = -1


class TasmotaDS18B20Parser(Parser):
    """DS18B20 temperature sensor: tele/<name>/SENSOR"""

    @property
    def kind(self) -> str:
        return "tasmota-ds18b20"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(SENSOR_TOPIC_RE, topic)
        if m is None:
            logger.debug("Ignoring non-SENSOR topic %r", topic)
            return None
        sensor = m.group("name")

        data = decode_json_object(payload)
        ds18b20 = require_object(data, "DS18B20")
        tags = {
            "name": sensor,
            "id": require_str(ds18b20, "Id"),
            "tempunit": require_str(data, "TempUnit"),
        }
        fields = {"temperature": require_number(ds18b20, "Temperature")}

        logger.info("%s temperature: %f", sensor, fields["temperature"])
        return MetricRecord(measurement="DS18B20", tags=tags, fields=fields)


def power_value(state: object) -> int:
    if state == "ON":
        return POWER_ON
    if state == "OFF":
        return POWER_OFF
    return POWER_UNKNOWN


class TasmotaStatePowerParser(Parser):
    """Relay state: tele/<name>/STATE with {"POWER": "ON"|"OFF"}"""

    @property
    def kind(self) -> str:
        return "tasmota-state-power"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(STATE_TOPIC_RE, topic)
        if m is None:
            logger.debug("Ignoring non-STATE topic %r", topic)
            return None
        sensor = m.group("name")

        data = decode_json_object(payload)
        if "POWER" not in data:
            logger.debug("No POWER STATE in %s", topic)
            return None

        power = power_value(data["POWER"])
        logger.info("%s power: %d", sensor, power)
        return MetricRecord(measurement="TasmotaStatePower", tags={"name": sensor}, fields={"power": power})
