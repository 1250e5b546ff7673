#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations


class Mqtt2InfluxError(Exception):
    """Base class for all bridge errors"""


class ConfigurationError(Mqtt2InfluxError):
    """
    Missing/invalid configuration (unknown parser, no topics, unreadable file)

    Raised only during startup; the process exits with non-zero code.
    """


class BrokerConnectionError(Mqtt2InfluxError):
    """Broker unreachable or connection refused within the connect timeout"""


class DecodeError(Mqtt2InfluxError, ValueError):
    """
    Payload does not match the shape expected by the active parser

    Per-message condition: the message is dropped and logged.
    """


class WriteError(Mqtt2InfluxError):
    """Single point write to InfluxDB failed; the metric is lost"""
