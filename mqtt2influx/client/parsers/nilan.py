#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
import re
from typing import Optional

from .base import Parser
from .values import match_topic, parse_float
from ..models import MetricRecord

logger = logging.getLogger(__name__)

# Output of https://github.com/jascdk/Nilan_Homeassistant
TOPIC_RE = re.compile(r"^[a-zA-Z0-9]*/(?P<group>[a-zA-Z0-9]*)/(?P<name>[a-zA-Z0-9_/]*)")

# Free text registers; InfluxDB field "value" is numeric for this measurement
SKIP_GROUP = "text"


class NilanParser(Parser):
    """Nilan heat pump registers: <prefix>/<group>/<name> with a numeric payload"""

    @property
    def kind(self) -> str:
        return "nilan"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(TOPIC_RE, topic)
        if m is None:
            logger.debug("Topic %r is not a nilan register topic", topic)
            return None

        group, name = m.group("group"), m.group("name")
        if group == SKIP_GROUP:
            logger.debug("Skipping text register %r", name)
            return None

        return MetricRecord(
            measurement="nilan",
            tags={"group": group, "name": name},
            fields={"value": parse_float(payload)},
        )
