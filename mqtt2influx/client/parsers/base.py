#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..models import MetricRecord


class Parser(ABC):
    """
    Base interface for a device family parser

    parse(): (topic, payload) -> MetricRecord, or None when the message
    is not meant for this parser (sibling topic, skipped group, etc)

    Notes:
      - parsers are pure: no state survives between two calls, so one
        instance is shared by all paho callback invocations
      - a payload that cannot be interpreted raises DecodeError
    """

    @property
    @abstractmethod
    def kind(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        raise NotImplementedError
