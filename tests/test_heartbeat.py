#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from mqtt2influx.client.heartbeat import Heartbeat


def test_check_touches_file_only_after_poke(tmp_path: Path):
    p = tmp_path / "heartbeat"
    hb = Heartbeat(60, str(p))

    assert hb.check() is False
    assert not p.exists()

    hb.poke()
    assert hb.check() is True
    assert p.exists()

    # No new pokes since the previous check
    assert hb.check() is False


def test_silent_interval_is_logged(caplog):
    caplog.set_level(logging.WARNING)
    hb = Heartbeat(5)
    hb.check()
    assert any("No messages processed" in r.getMessage() for r in caplog.records)


def test_poke_without_file_still_counts_as_alive():
    hb = Heartbeat(5)
    hb.poke()
    assert hb.last_poke > 0
    assert hb.check() is True


def test_start_stop_background_thread():
    hb = Heartbeat(0.05)
    hb.start()
    hb.start()  # second start is a no-op
    hb.stop()


@pytest.mark.parametrize("interval", [0, -1])
def test_invalid_interval_rejected(interval: float):
    with pytest.raises(ValueError):
        Heartbeat(interval)
