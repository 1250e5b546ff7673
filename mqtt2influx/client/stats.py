#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import threading


class DispatchStats:
    """Counters of dispatcher outcomes, updated from paho callback threads"""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.received = 0
        self.written = 0
        self.ignored = 0
        self.decode_errors = 0
        self.write_errors = 0

    def incr(self, name: str) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + 1)

    def __str__(self) -> str:
        return (
            f"Stats: received={self.received} written={self.written} ignored={self.ignored} "
            f"decode_errors={self.decode_errors} write_errors={self.write_errors}"
        )
