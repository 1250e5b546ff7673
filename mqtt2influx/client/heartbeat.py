#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class Heartbeat:
    """
    Liveness signal for an external supervisor

    The dispatcher calls poke() after every handled message. Once per
    interval a background thread checks whether anything was poked since
    the previous check; if so it touches the heartbeat file, whose mtime is
    watched by the supervisor. A silent interval is only logged: restarting
    the process is the supervisor's decision.
    """

    def __init__(self, interval: float, path: Optional[str] = None) -> None:
        if interval <= 0:
            raise ValueError("Heartbeat interval must be positive, got %r" % interval)
        self._interval = interval
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._last_poke: float = 0.0
        self._pokes = 0
        self._pokes_seen = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def last_poke(self) -> float:
        with self._lock:
            return self._last_poke

    def poke(self) -> None:
        with self._lock:
            self._last_poke = time.monotonic()
            self._pokes += 1

    def check(self) -> bool:
        """Run one liveness check; True when there was progress since the last one"""
        with self._lock:
            alive = self._pokes != self._pokes_seen
            self._pokes_seen = self._pokes

        if not alive:
            logger.warning("No messages processed during the last %.0f s", self._interval)
            return False

        if self._path is not None:
            try:
                self._path.touch()
            except OSError as e:
                logger.error("Cannot touch heartbeat file %r: %r", str(self._path), e)
                return True
        logger.debug("Heartbeat")
        return True

    def start(self) -> None:
        if self._thread is not None:
            return
        logger.info("Starting heartbeat: interval=%ss file=%s", self._interval, self._path)
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="heartbeat", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=self._interval)
            self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            self.check()
