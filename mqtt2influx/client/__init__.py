#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Runtime side of the bridge

  subscriber  (MQTT, paho)      -> InboundMessage
  dispatcher  (active parser)   -> MetricRecord
  sink        (InfluxDB)        -> point write
"""
