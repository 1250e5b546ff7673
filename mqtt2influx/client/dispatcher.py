#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .errors import DecodeError, WriteError
from .heartbeat import Heartbeat
from .models import InboundMessage, MetricRecord
from .parsers.base import Parser
from .stats import DispatchStats

logger = logging.getLogger(__name__)


class MetricSink(Protocol):
    def write(self, record: MetricRecord) -> None: ...


class Dispatcher:
    """
    Routes every inbound MQTT message through the active parser into the sink

    Outcomes per message:
      - parser returns a record    -> sink.write(record)
      - parser returns None        -> dropped silently (normal case)
      - parser raises DecodeError  -> dropped, warning logged
      - parser raises anything else-> dropped, traceback logged
      - sink raises WriteError     -> metric lost, error logged

    Nothing propagates to the caller: paho invokes dispatch() from its
    network thread and one bad payload must not stop the stream.

    Notes:
      - Dispatcher does NOT know topic grammars; parsers do
      - Dispatcher does NOT own broker or InfluxDB connections; they are
        injected and outlive it
    """

    def __init__(
        self,
        parser: Parser,
        sink: MetricSink,
        heartbeat: Optional[Heartbeat] = None,
        stats: Optional[DispatchStats] = None,
    ) -> None:
        self._parser = parser
        self._sink = sink
        self._heartbeat = heartbeat
        self.stats = stats if stats is not None else DispatchStats()

    @property
    def parser(self) -> Parser:
        return self._parser

    def handle_message(self, msg: InboundMessage) -> None:
        """Subscriber callback"""
        self.dispatch(msg.topic, msg.payload)

    def dispatch(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        """Process one message; returns the record handed to the sink, if any"""
        self.stats.incr("received")
        logger.debug("[%s] %r", topic, payload)
        try:
            return self._dispatch(topic, payload)
        finally:
            if self._heartbeat is not None:
                self._heartbeat.poke()

    def _dispatch(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        try:
            record = self._parser.parse(topic, payload)
        except DecodeError as e:
            self.stats.incr("decode_errors")
            logger.warning("Dropping message on %r (%s parser): %s", topic, self._parser.kind, e)
            return None
        except Exception:
            self.stats.incr("decode_errors")
            logger.exception("Parser %r failed on topic %r", self._parser.kind, topic)
            return None

        if record is None:
            self.stats.incr("ignored")
            return None

        try:
            self._sink.write(record)
        except WriteError as e:
            self.stats.incr("write_errors")
            logger.error("Error writing to influx: %s", e)
            return None
        except Exception:
            self.stats.incr("write_errors")
            logger.exception("Unexpected error writing %r to influx", record.measurement)
            return None

        self.stats.incr("written")
        return record
