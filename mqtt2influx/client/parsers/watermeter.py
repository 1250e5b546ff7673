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

TOPIC_RE = re.compile(r"^[a-zA-Z0-9]*/(?P<name>[a-zA-Z0-9]*)")


class WatermeterParser(Parser):
    """
    Water meter readings: <prefix>/<name> with a numeric payload

    The meter name is used as measurement. A reading of exactly 0 means the
    meter could not be read and is skipped.
    """

    @property
    def kind(self) -> str:
        return "watermeter"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        m = match_topic(TOPIC_RE, topic)
        if m is None:
            logger.debug("Topic %r is not a watermeter topic", topic)
            return None
        name = m.group("name")

        value = parse_float(payload)
        if value == 0:
            logger.debug("Skipping zero reading from %r", name)
            return None

        return MetricRecord(measurement=name, tags={"name": name}, fields={"value": value})
