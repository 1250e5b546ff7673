#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from .errors import DecodeError

FieldValue = Union[float, int, str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class InboundMessage:
    """
    Raw message produced by the MQTT subscriber

    Fields:
      - topic: MQTT topic the message was published to
      - payload: raw payload bytes, not interpreted yet
      - meta: optional transport metadata (qos/retain)
    """

    topic: str
    payload: bytes
    meta: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class MetricRecord:
    """
    One time-series point extracted from one inbound message

    Created by a parser, handed to the sink immediately and never retained.

    Example (output of the zigbee2mqtt parser):
        MetricRecord(
            measurement="zigbee2mqtt",
            tags={"group": "livingroom", "name": "temperature"},
            fields={"temperature": 21.5},
        )
    """

    measurement: str
    tags: Dict[str, str]
    fields: Dict[str, FieldValue]
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if not self.measurement:
            raise DecodeError("Metric record needs a measurement name")
        if not self.fields:
            raise DecodeError("Metric record %r has no fields" % self.measurement)
        for key, value in self.tags.items():
            if not isinstance(value, str):
                raise DecodeError("Tag %r must be a string, got %r" % (key, value))
