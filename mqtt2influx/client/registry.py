#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, Union

from .errors import ConfigurationError
from .parsers.base import Parser
from .parsers.nilan import NilanParser
from .parsers.sonoff import SonoffPowR2Parser
from .parsers.tasmota import TasmotaDS18B20Parser, TasmotaStatePowerParser
from .parsers.watermeter import WatermeterParser
from .parsers.wunderground import WundergroundParser
from .parsers.xiaomi import DEFAULT_MAGNET_POLICY, MagnetPolicy, XiaomiParser
from .parsers.zigbee2mqtt import Zigbee2MqttParser

logger = logging.getLogger(__name__)


class ParserKind(str, Enum):
    """Device families the bridge can parse; values are the config names"""

    XIAOMI = "xiaomi"
    SONOFF_POW_R2 = "sonoffPowR2"
    NILAN = "nilan"
    ZIGBEE2MQTT = "zigbee2mqtt"
    WATERMETER = "watermeter"
    WUNDERGROUND = "wunderground"
    TASMOTA_DS18B20 = "tasmota-ds18b20"
    TASMOTA_STATE_POWER = "tasmota-state-power"

    @classmethod
    def parse(cls, value: Union[str, "ParserKind"]) -> "ParserKind":
        """
        Convert config value to ParserKind

        Raises ConfigurationError for empty or unknown names.
        """
        if isinstance(value, cls):
            return value
        if not value:
            raise ConfigurationError("Parser missing in configuration")
        try:
            return cls(str(value).strip())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ConfigurationError("Unknown parser %r (known: %s)" % (value, known)) from None


ParserFactory = Callable[[MagnetPolicy], Parser]

_FACTORIES: Dict[ParserKind, ParserFactory] = {
    ParserKind.XIAOMI: lambda policy: XiaomiParser(magnet_policy=policy),
    ParserKind.SONOFF_POW_R2: lambda policy: SonoffPowR2Parser(),
    ParserKind.NILAN: lambda policy: NilanParser(),
    ParserKind.ZIGBEE2MQTT: lambda policy: Zigbee2MqttParser(),
    ParserKind.WATERMETER: lambda policy: WatermeterParser(),
    ParserKind.WUNDERGROUND: lambda policy: WundergroundParser(),
    ParserKind.TASMOTA_DS18B20: lambda policy: TasmotaDS18B20Parser(),
    ParserKind.TASMOTA_STATE_POWER: lambda policy: TasmotaStatePowerParser(),
}


def resolve_parser(
    kind: Union[str, ParserKind],
    *,
    magnet_policy: MagnetPolicy = DEFAULT_MAGNET_POLICY,
) -> Parser:
    """
    Build the parser that stays active for the whole process lifetime

    Example:
        resolve_parser("zigbee2mqtt") -> Zigbee2MqttParser()
        resolve_parser("foo")         -> ConfigurationError
    """
    parser_kind = ParserKind.parse(kind)
    factory = _FACTORIES.get(parser_kind)
    if factory is None:  # pragma: no cover
        raise ConfigurationError("No parser registered for %r" % parser_kind.value)
    parser = factory(magnet_policy)
    logger.info("Using parser %r", parser.kind)
    return parser
