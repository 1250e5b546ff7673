#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Device family parsers

One module per family of devices publishing to MQTT. Every parser
implements parsers.base.Parser and is selected by registry.ParserKind.
"""
