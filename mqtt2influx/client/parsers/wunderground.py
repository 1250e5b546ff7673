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

# Output of https://github.com/anderskvist/GoWundergroundProxy
TOPIC_RE = re.compile(r"^[a-zA-Z0-9]*/(?P<station>[a-zA-Z0-9]*)/(?P<name>[a-zA-Z0-9]*)")


class WundergroundParser(Parser):
    """Weather station values: <prefix>/<station>/<name>, measurement = station"""

    @property
    def kind(self) -> str:
        return "wunderground"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(TOPIC_RE, topic)
        if m is None:
            logger.debug("Topic %r is not a wunderground topic", topic)
            return None

        station, name = m.group("station"), m.group("name")
        return MetricRecord(
            measurement=station,
            tags={"station": station, "name": name},
            fields={"value": parse_float(payload)},
        )
