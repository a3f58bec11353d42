"""Tests for log directory resolution logic."""

from __future__ import annotations

import pathlib
from types import SimpleNamespace

import pytest

from scripture_engine.core import logging as core_logging

# pylint: disable=missing-function-docstring,protected-access


def _make_settings(log_dir: pathlib.Path | None, data_dir: pathlib.Path) -> SimpleNamespace:
    return SimpleNamespace(
        SCRIPTURE_LOG_LEVEL="info",
        SCRIPTURE_LOG_DIR=log_dir,
        DATA_DIR=data_dir,
    )


def _patch_dirs(monkeypatch: pytest.MonkeyPatch, settings, root_dir, base_dir) -> None:
    monkeypatch.setattr(core_logging, "settings", settings)
    monkeypatch.setattr(core_logging, "ROOT_DIR", root_dir)
    monkeypatch.setattr(core_logging, "BASE_DIR", base_dir)


def test_resolve_logs_dir_prefers_override(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    override = tmp_path / "custom-logs"
    _patch_dirs(
        monkeypatch,
        _make_settings(override, tmp_path / "data"),
        tmp_path / "app",
        tmp_path / "app" / "pkg",
    )

    resolved = core_logging._resolve_logs_dir()
    assert resolved == override
    assert resolved.exists()


def test_resolve_logs_dir_falls_back_to_root_logs(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    root_dir = tmp_path / "deploy"
    _patch_dirs(monkeypatch, _make_settings(None, tmp_path / "data"), root_dir, root_dir / "pkg")

    assert core_logging._resolve_logs_dir() == root_dir / "logs"


def test_resolve_logs_dir_uses_data_dir_when_root_is_unwritable(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    # A regular file where the root "logs" directory should go makes mkdir fail.
    root_dir = tmp_path / "deploy"
    root_dir.mkdir()
    (root_dir / "logs").write_text("not a directory", encoding="utf-8")
    data_dir = tmp_path / "data"
    _patch_dirs(monkeypatch, _make_settings(None, data_dir), root_dir, root_dir / "pkg")

    assert core_logging._resolve_logs_dir() == data_dir / "logs"
