#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from mqtt2influx.lib.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_INFLUX_ORG,
    DEFAULT_INFLUX_TIMEOUT_MS,
    DEFAULT_WATCHDOG_INTERVAL,
    MAGNET_POLICIES,
)


class MqttSettings(BaseModel):
    url: str
    topic: str
    parser: str
    connect_timeout: float = Field(default=DEFAULT_CONNECT_TIMEOUT, gt=0)

    @field_validator("url", "topic", "parser")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    def topics(self) -> List[str]:
        return [t.strip() for t in self.topic.split(",") if t.strip()]


class InfluxSettings(BaseModel):
    url: str = ""
    username: str = ""
    password: str = ""
    database: str = ""
    retention_policy: str = ""
    token: str = ""  # InfluxDB 2.x; username/password are used when empty
    org: str = DEFAULT_INFLUX_ORG
    timeout: int = Field(default=DEFAULT_INFLUX_TIMEOUT_MS, gt=0)  # milliseconds

    @property
    def bucket(self) -> str:
        if self.retention_policy:
            return f"{self.database}/{self.retention_policy}"
        return self.database

    @property
    def auth_token(self) -> str:
        if self.token:
            return self.token
        if self.username:
            return f"{self.username}:{self.password}"
        return ""


class WatchdogSettings(BaseModel):
    interval: float = Field(default=DEFAULT_WATCHDOG_INTERVAL, gt=0)  # seconds
    file: Optional[str] = None


class XiaomiSettings(BaseModel):
    magnet_policy: str = MAGNET_POLICIES[0]

    @field_validator("magnet_policy")
    @classmethod
    def _known_policy(cls, value: str) -> str:
        value = value.strip()
        if value not in MAGNET_POLICIES:
            raise ValueError("must be one of %s" % ", ".join(MAGNET_POLICIES))
        return value


class LogSettings(BaseModel):
    level: str = "INFO"  # Possible values: "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("unknown log level %r" % value)
        return value


class Settings(BaseModel):
    mqtt: MqttSettings
    influxdb: InfluxSettings = InfluxSettings()
    watchdog: WatchdogSettings = WatchdogSettings()
    xiaomi: XiaomiSettings = XiaomiSettings()
    log: LogSettings = LogSettings()
