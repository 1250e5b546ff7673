#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import configparser
import logging
from typing import Any, Dict

from pydantic import ValidationError

from mqtt2influx.client.errors import ConfigurationError
from mqtt2influx.lib.settings import Settings

logger = logging.getLogger(__name__)

SECTIONS = ("mqtt", "influxdb", "watchdog", "xiaomi", "log")


def read_ini(path: str) -> Dict[str, Dict[str, str]]:
    """
    Read INI file into {section: {key: value}}

    Keys with empty values are left out so model defaults apply.
    Interpolation is disabled: passwords may contain "%".
    """
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, "r", encoding="utf-8") as f:
            parser.read_file(f)
    except (OSError, configparser.Error) as e:
        raise ConfigurationError("Fail to read file %r: %s" % (path, e)) from e

    raw: Dict[str, Dict[str, str]] = {}
    for section in parser.sections():
        if section not in SECTIONS:
            logger.warning("Unknown configuration section [%s] ignored", section)
            continue
        raw[section] = {k: v for k, v in parser.items(section) if v.strip() != ""}
    return raw


def load_config(path: str) -> Settings:
    """
    Load and validate INI config from disk.

    Input:
      path: path to INI file.

    Output:
      Settings with one attribute per section.

    Example:
      settings = load_config("/etc/mqtt2influx.ini")
      settings.mqtt.topics() -> ["zigbee2mqtt", "tele"]
    """
    logger.debug("Reading configuration file %r...", path)
    raw: Dict[str, Any] = read_ini(path)
    if "mqtt" not in raw:
        raise ConfigurationError("Section [mqtt] is missing in configuration")

    try:
        settings = Settings.model_validate(raw)
    except ValidationError as e:
        problems = "; ".join(
            "%s: %s" % (".".join(str(p) for p in err["loc"]), err["msg"]) for err in e.errors()
        )
        raise ConfigurationError("Invalid configuration %r: %s" % (path, problems)) from e

    if not settings.mqtt.topics():
        raise ConfigurationError("topic to subscribe to is missing in configuration")
    return settings
