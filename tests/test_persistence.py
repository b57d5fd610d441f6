"""Tests for settings persistence and the saved-session store."""

from __future__ import annotations

import json

import pytest

from timertime.database.db import configure_engine, get_session, init_db
from timertime.database.models import SavedSession
from timertime.database.snapshots import save_snapshot, load_snapshot, clear_snapshot
from timertime.settings import Settings, load_settings, save_settings
from timertime.timer.lifecycle import LifecycleState, Phase


SNAP = {
    "repeat_count": 5,
    "total_seconds": 15,
    "remaining_seconds": 9,
    "animation_visible": True,
    "countdown_visible": True,
    "restart_visible": False,
}


# ═══════════════════════════════════════════════════════════════════════
#  SAVED SESSION
# ═══════════════════════════════════════════════════════════════════════


class TestSnapshotStore:

    def test_empty_by_default(self):
        assert load_snapshot() is None

    def test_round_trip(self):
        save_snapshot(SNAP)
        loaded = load_snapshot()
        assert loaded == SNAP
        assert LifecycleState.from_snapshot(loaded).phase == Phase.RUNNING

    def test_save_replaces_single_row(self):
        save_snapshot(SNAP)
        save_snapshot({**SNAP, "remaining_seconds": 2})
        with get_session() as db:
            assert db.query(SavedSession).count() == 1
        assert load_snapshot()["remaining_seconds"] == 2

    def test_clear(self):
        save_snapshot(SNAP)
        clear_snapshot()
        assert load_snapshot() is None

    def test_loaded_flags_are_bools(self):
        save_snapshot({**SNAP, "restart_visible": True})
        loaded = load_snapshot()
        assert loaded["restart_visible"] is True
        assert loaded["countdown_visible"] is True

    def test_failed_session_rolls_back(self):
        with pytest.raises(RuntimeError):
            with get_session() as db:
                db.add(SavedSession(**SNAP))
                db.flush()
                raise RuntimeError("boom")
        assert load_snapshot() is None

    def test_configure_engine_starts_a_fresh_store(self):
        save_snapshot(SNAP)
        configure_engine("sqlite:///:memory:")
        init_db()
        assert load_snapshot() is None


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettings:

    def _point_at(self, tmp_path, monkeypatch):
        path = tmp_path / "settings.json"
        monkeypatch.setattr("timertime.settings.SETTINGS_PATH", path)
        monkeypatch.setattr("timertime.settings.APP_SUPPORT_DIR", tmp_path)
        return path

    def test_defaults(self):
        s = Settings()
        assert s.dark_mode is False
        assert s.animation_speed == 0.8
        assert s.restore_session is True
        assert s.window_x is None
        assert s.log_level == "INFO"

    def test_round_trip(self, tmp_path, monkeypatch):
        self._point_at(tmp_path, monkeypatch)
        save_settings(Settings(dark_mode=True, window_x=40, window_y=60))
        loaded = load_settings()
        assert loaded.dark_mode is True
        assert loaded.window_x == 40
        assert loaded.window_y == 60

    def test_missing_file_gives_defaults(self, tmp_path, monkeypatch):
        self._point_at(tmp_path, monkeypatch)
        assert load_settings() == Settings()

    def test_unknown_keys_ignored(self, tmp_path, monkeypatch):
        path = self._point_at(tmp_path, monkeypatch)
        path.write_text(json.dumps({"dark_mode": True, "volume": 11}))
        loaded = load_settings()
        assert loaded.dark_mode is True
        assert not hasattr(loaded, "volume")

    def test_corrupt_file_gives_defaults(self, tmp_path, monkeypatch):
        path = self._point_at(tmp_path, monkeypatch)
        path.write_text("{not json")
        assert load_settings() == Settings()

    @pytest.mark.parametrize("speed", [0, -1, "fast", True, None, 1e400])
    def test_bad_speed_falls_back_to_default(self, tmp_path, monkeypatch, speed):
        path = self._point_at(tmp_path, monkeypatch)
        # 1e400 is written as Infinity by json.dumps
        path.write_text(json.dumps({"dark_mode": True, "animation_speed": speed}))
        loaded = load_settings()
        assert loaded.animation_speed == 0.8
        assert loaded.dark_mode is True

    def test_good_speed_kept(self, tmp_path, monkeypatch):
        path = self._point_at(tmp_path, monkeypatch)
        path.write_text(json.dumps({"animation_speed": 2}))
        assert load_settings().animation_speed == 2

    def test_non_object_file_gives_defaults(self, tmp_path, monkeypatch):
        path = self._point_at(tmp_path, monkeypatch)
        path.write_text("[1, 2]")
        assert load_settings() == Settings()
