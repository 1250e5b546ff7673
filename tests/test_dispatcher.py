#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Dispatcher tests.

The dispatcher must:
  - forward every record produced by the parser to the sink
  - drop None results silently
  - never let a parser or sink failure escape
  - poke the heartbeat once per handled message
"""

from __future__ import annotations

import logging
from typing import List, Optional
from unittest.mock import MagicMock

from mqtt2influx.client.dispatcher import Dispatcher
from mqtt2influx.client.errors import WriteError
from mqtt2influx.client.models import InboundMessage, MetricRecord
from mqtt2influx.client.parsers.base import Parser
from mqtt2influx.client.registry import ParserKind, resolve_parser


class DummySink:
    """
    Minimal sink stub:
    - write() collects records so we can assert what dispatcher sent
    - fail=True makes every write raise WriteError
    """

    def __init__(self, fail: bool = False) -> None:
        self.records: List[MetricRecord] = []
        self.fail = fail

    def write(self, record: MetricRecord) -> None:
        if self.fail:
            raise WriteError("influx is down")
        self.records.append(record)


class ExplodingParser(Parser):
    @property
    def kind(self) -> str:
        return "exploding"

    def parse(self, topic: str, payload: bytes) -> Optional[MetricRecord]:
        raise KeyError("unexpected")


def test_record_is_forwarded_to_sink():
    sink = DummySink()
    d = Dispatcher(resolve_parser("zigbee2mqtt"), sink)

    rec = d.dispatch("zigbee2mqtt/livingroom/temperature", b'{"temperature":21.5}')

    assert sink.records == [rec]
    assert rec.fields == {"temperature": 21.5}
    assert d.stats.written == 1


def test_handle_message_uses_topic_and_payload():
    sink = DummySink()
    d = Dispatcher(resolve_parser("watermeter"), sink)

    d.handle_message(InboundMessage(topic="water/meter1", payload=b"123.4", meta={"qos": 0}))

    assert len(sink.records) == 1
    assert sink.records[0].measurement == "meter1"


def test_ignored_message_is_not_written():
    sink = DummySink()
    d = Dispatcher(resolve_parser("zigbee2mqtt"), sink)

    assert d.dispatch("zigbee2mqtt/bridge/state", b"online") is None
    assert sink.records == []
    assert d.stats.ignored == 1


def test_malformed_payload_never_escapes(caplog):
    """Every parser gets garbage; dispatch must return normally each time"""
    caplog.set_level(logging.WARNING)
    garbage = [b"{", b"\xff\xfe", b"[]", b"", b'{"ENERGY": 1}']
    topics = [
        "xiaomi/magnet/158d0001/status",
        "sonoff1/tele/SENSOR",
        "ventilation/temp/T1",
        "zigbee2mqtt/livingroom/temperature",
        "water/meter1",
        "wunderground/IHOME42/tempc",
        "tele/boiler1/SENSOR",
        "tele/SENSOR01/STATE",
    ]
    for kind in ParserKind:
        sink = DummySink()
        d = Dispatcher(resolve_parser(kind), sink)
        for topic in topics:
            for payload in garbage:
                d.dispatch(topic, payload)
        assert d.stats.received == len(topics) * len(garbage)

    assert any("Dropping message" in r.getMessage() for r in caplog.records)


def test_unexpected_parser_exception_is_logged_and_dropped(caplog):
    caplog.set_level(logging.ERROR)
    sink = DummySink()
    d = Dispatcher(ExplodingParser(), sink)

    assert d.dispatch("a/b", b"1") is None
    assert sink.records == []
    assert d.stats.decode_errors == 1
    assert any("Parser 'exploding' failed" in r.getMessage() for r in caplog.records)


def test_write_error_is_logged_and_processing_continues(caplog):
    caplog.set_level(logging.ERROR)
    sink = DummySink(fail=True)
    d = Dispatcher(resolve_parser("watermeter"), sink)

    assert d.dispatch("water/meter1", b"1.5") is None
    assert d.dispatch("water/meter1", b"1.6") is None
    assert d.stats.write_errors == 2
    assert any("Error writing to influx" in r.getMessage() for r in caplog.records)


def test_replay_yields_independent_writes_with_non_decreasing_timestamps():
    sink = DummySink()
    d = Dispatcher(resolve_parser("tasmota-state-power"), sink)

    d.dispatch("tele/SENSOR01/STATE", b'{"POWER":"ON"}')
    d.dispatch("tele/SENSOR01/STATE", b'{"POWER":"ON"}')

    assert len(sink.records) == 2
    first, second = sink.records
    assert first is not second
    assert first.fields == second.fields == {"power": 1}
    assert first.timestamp <= second.timestamp


def test_heartbeat_poked_for_every_message():
    heartbeat = MagicMock()
    d = Dispatcher(resolve_parser("nilan"), DummySink(), heartbeat=heartbeat)

    d.dispatch("ventilation/temp/T1", b"21.5")  # written
    d.dispatch("home/text/foo", b"Normal")  # ignored
    d.dispatch("ventilation/temp/T1", b"warm")  # decode error

    assert heartbeat.poke.call_count == 3


def test_stats_summary_counts_every_outcome():
    d = Dispatcher(resolve_parser("nilan"), DummySink())

    d.dispatch("ventilation/temp/T1", b"21.5")
    d.dispatch("home/text/foo", b"Normal")
    d.dispatch("home/temp/", b"21.5")
    d.dispatch("ventilation/temp/T1", b"warm")

    assert str(d.stats) == "Stats: received=4 written=1 ignored=2 decode_errors=1 write_errors=0"
