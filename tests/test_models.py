#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

from datetime import timezone

import pytest

from mqtt2influx.client.errors import DecodeError
from mqtt2influx.client.models import MetricRecord


def test_record_defaults_to_current_utc_time():
    rec = MetricRecord("nilan", {"group": "temp"}, {"value": 1.0})
    assert rec.timestamp.tzinfo is timezone.utc


def test_record_without_measurement_rejected():
    with pytest.raises(DecodeError, match="measurement"):
        MetricRecord("", {}, {"value": 1.0})


def test_record_without_fields_rejected():
    with pytest.raises(DecodeError, match="no fields"):
        MetricRecord("nilan", {"group": "temp"}, {})


def test_tag_values_must_be_strings():
    with pytest.raises(DecodeError, match="Tag 'id'"):
        MetricRecord("DS18B20", {"id": 42}, {"temperature": 21.3})
