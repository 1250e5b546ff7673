#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
import re
from typing import Optional

from .base import Parser
from .values import decode_json_object, match_topic, require_number, require_object
from ..models import MetricRecord

logger = logging.getLogger(__name__)

TOPIC_RE = re.compile(r"^(?P<name>[a-zA-Z0-9]*)/.*")

# field name -> key inside the Tasmota "ENERGY" object
ENERGY_FIELDS = (
    ("total", "Total"),
    ("yesterday", "Yesterday"),
    ("today", "Today"),
    ("power", "Power"),
    ("apparentpower", "ApparentPower"),
    ("reactivepower", "ReactivePower"),
    ("factor", "Factor"),
    ("voltage", "Voltage"),
    ("current", "Current"),
)


class SonoffPowR2Parser(Parser):
    """Energy telemetry of Sonoff POW R2 plugs: <name>/... with {"ENERGY": {...}}"""

    @property
    def kind(self) -> str:
        return "sonoffPowR2"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(TOPIC_RE, topic)
        if m is None:
            logger.debug("Topic %r has no sonoff device name", topic)
            return None
        sensor = m.group("name")

        energy = require_object(decode_json_object(payload), "ENERGY")
        fields = {name: require_number(energy, key) for name, key in ENERGY_FIELDS}

        for k, v in fields.items():
            logger.info("%s %s: %f", sensor, k, v)

        return MetricRecord(measurement="sonoffPowR2", tags={"name": sensor}, fields=fields)
