#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
MQTT -> InfluxDB bridge

Subscribes to device telemetry topics and writes one InfluxDB point per
accepted message. The device family grammar is selected once at startup.
"""
