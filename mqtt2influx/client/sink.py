#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from typing import Any, Optional

from influxdb_client import InfluxDBClient, Point, WritePrecision
from influxdb_client.client.write_api import SYNCHRONOUS
from influxdb_client.rest import ApiException

from mqtt2influx.lib.settings import InfluxSettings

from .errors import WriteError
from .models import MetricRecord

logger = logging.getLogger(__name__)

PRECISION = WritePrecision.S


def to_point(record: MetricRecord) -> Point:
    """
    Convert MetricRecord into an InfluxDB point with second precision

    Example:
        to_point(MetricRecord("nilan", {"group": "temp", "name": "T1"}, {"value": 21.5}))
          .to_line_protocol() -> "nilan,group=temp,name=T1 value=21.5 <unix seconds>"
    """
    p = Point(record.measurement)
    for key, value in record.tags.items():
        p = p.tag(key, value)
    for key, value in record.fields.items():
        p = p.field(key, value)
    return p.time(record.timestamp, PRECISION)


class InfluxSink:
    """
    Writes one point per record, synchronously

    No batching, queueing or retry: a failed write raises WriteError and
    the metric is lost. A new Point is built per call, so write() may be
    called from several paho threads at once.

    Notes:
      - InfluxDB 1.x is addressed through its /api/v2/write compatibility
        endpoint: bucket "<database>[/<retention policy>]", token
        "<username>:<password>"
      - In tests we inject a mocked InfluxDBClient via `client=...`
    """

    def __init__(self, settings: InfluxSettings, client: Optional[Any] = None) -> None:
        if not settings.url and client is None:
            raise ValueError("InfluxDB url is missing")
        if not settings.database:
            raise ValueError("InfluxDB database is missing")
        self._settings = settings

        if client is None:
            client = InfluxDBClient(
                url=settings.url,
                token=settings.auth_token,
                org=settings.org,
                timeout=settings.timeout,
            )
        self._client = client
        self._write_api = client.write_api(write_options=SYNCHRONOUS)

    @property
    def bucket(self) -> str:
        return self._settings.bucket

    def write(self, record: MetricRecord) -> None:
        point = to_point(record)
        try:
            self._write_api.write(
                bucket=self._settings.bucket,
                org=self._settings.org,
                record=point,
                write_precision=PRECISION,
            )
        except ApiException as e:
            raise WriteError("InfluxDB rejected %r: %s %s" % (record.measurement, e.status, e.reason)) from e
        except Exception as e:
            raise WriteError("InfluxDB write of %r failed: %r" % (record.measurement, e)) from e

        logger.info("Wrote %s %s %s", record.measurement, record.tags, record.fields)

    def close(self) -> None:
        logger.info("Closing InfluxDB client")
        try:
            self._write_api.close()
        finally:
            self._client.close()
