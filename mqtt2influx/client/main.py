#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
MQTT -> InfluxDB bridge

Usage:
    mqtt2influx /etc/mqtt2influx.ini [--debug]
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from enum import IntEnum
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from mqtt2influx.lib.constants import LOG_DATE_FORMAT, LOG_FORMAT
from mqtt2influx.lib.load_config import load_config
from mqtt2influx.lib.settings import Settings

from .dispatcher import Dispatcher
from .errors import BrokerConnectionError, ConfigurationError
from .heartbeat import Heartbeat
from .parsers.xiaomi import MagnetPolicy
from .registry import resolve_parser
from .sink import InfluxSink
from .subscriber import MqttSubscriber, make_client_id, parse_broker_url

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    SUCCESS = 0
    GEN_ERROR = 1  # Unexpected errors
    CONFIG_ERROR = 2  # Unreadable or invalid configuration
    CONNECTION_ERROR = 3  # Initial broker connection failed


def get_pkg_ver() -> str:
    try:
        return version("mqtt2influx")
    except PackageNotFoundError:
        return "unknown"


def setup_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)
    logging.captureWarnings(True)


class App:
    """
    Wires configured components together and owns their lifetime

    Startup order:
      1. parser     - fails fast on unknown parser kind
      2. sink       - InfluxDB client (no connection is made yet)
      3. heartbeat  - liveness file for the supervisor
      4. subscriber - connects and subscribes; messages flow from here on
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.stop_event = threading.Event()

        parser = resolve_parser(
            settings.mqtt.parser,
            magnet_policy=MagnetPolicy(settings.xiaomi.magnet_policy),
        )
        try:
            self.sink = InfluxSink(settings.influxdb)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        self.heartbeat = Heartbeat(settings.watchdog.interval, settings.watchdog.file)
        self.dispatcher = Dispatcher(parser, self.sink, heartbeat=self.heartbeat)

        cfg = parse_broker_url(
            settings.mqtt.url,
            client_id=make_client_id(parser.kind),
            connect_timeout=settings.mqtt.connect_timeout,
        )
        self.subscriber = MqttSubscriber(cfg=cfg, topics=settings.mqtt.topics())

    def start(self) -> None:
        self.heartbeat.start()
        self.subscriber.start(self.dispatcher.handle_message)
        logger.info("Client initialization complete, waiting for messages")

    def request_stop(self, signum: int, frame: object = None) -> None:
        logger.info("Signal %s received, stopping...", signal.Signals(signum).name)
        self.stop_event.set()

    def wait(self) -> None:
        self.stop_event.wait()

    def shutdown(self) -> None:
        logger.info("Starting graceful shutdown...")
        try:
            self.subscriber.stop()
        finally:
            self.heartbeat.stop()
            self.sink.close()
        logger.info(str(self.dispatcher.stats))


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Write MQTT device telemetry to InfluxDB")
    ap.add_argument("config", help="path to INI configuration file")
    ap.add_argument("--debug", action="store_true", help="force DEBUG log level")
    args = ap.parse_args(argv)

    setup_logging("DEBUG" if args.debug else "INFO")
    logger.info("mqtt2influx version: %s", get_pkg_ver())

    try:
        settings = load_config(args.config)
        if not args.debug:
            setup_logging(settings.log.level)
        app = App(settings)
    except ConfigurationError as e:
        logger.critical("%s", e)
        return ExitCode.CONFIG_ERROR

    try:
        app.start()
    except BrokerConnectionError as e:
        logger.critical("%s", e)
        app.heartbeat.stop()
        app.sink.close()
        return ExitCode.CONNECTION_ERROR

    signal.signal(signal.SIGINT, app.request_stop)
    signal.signal(signal.SIGTERM, app.request_stop)

    app.wait()
    app.shutdown()
    return ExitCode.SUCCESS


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C)")
    except Exception as e:
        logger.exception("Unhandled exception: %r", e)
        sys.exit(ExitCode.GEN_ERROR)


if __name__ == "__main__":
    run()
