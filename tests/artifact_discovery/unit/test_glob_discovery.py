"""Artifact discovery tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from boom_verifier.artifact_discovery.artifact_models import Artifact, DiscoveryError
from boom_verifier.artifact_discovery.glob_discovery import discover, suffix_exclusion


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_text("", encoding="utf-8")


def test_discover_excludes_dump_companions_and_sorts_by_path(tmp_path: Path) -> None:
    _touch(tmp_path, "rv64ui-p-sub", "rv64ui-p-add", "rv64ui-p-add.dump", "rv32ui-p-add")

    artifacts = discover(tmp_path, "rv64*", suffix_exclusion("dump"))

    assert [artifact.name for artifact in artifacts] == ["rv64ui-p-add", "rv64ui-p-sub"]
    assert all(not artifact.path.name.endswith("dump") for artifact in artifacts)


def test_discover_without_exclusion_keeps_every_match(tmp_path: Path) -> None:
    _touch(tmp_path, "foo", "foo.dump")

    artifacts = discover(tmp_path, "foo*")

    assert [artifact.name for artifact in artifacts] == ["foo", "foo.dump"]


def test_suffix_exclusion_matches_final_segment_only() -> None:
    excluded = suffix_exclusion(".dump")

    assert excluded(Path("/isa/foo.dump"))
    assert not excluded(Path("/isa/foo"))
    assert not excluded(Path("/tests.dump/foo"))


def test_empty_suffix_excludes_nothing() -> None:
    assert suffix_exclusion(None)(Path("foo.dump")) is False
    assert suffix_exclusion("")(Path("foo.dump")) is False


def test_discover_returns_empty_tuple_when_nothing_matches(tmp_path: Path) -> None:
    _touch(tmp_path, "readme.txt")

    assert discover(tmp_path, "*.riscv") == ()


def test_discover_missing_root_raises_discovery_error(tmp_path: Path) -> None:
    with pytest.raises(DiscoveryError, match="not found"):
        discover(tmp_path / "missing", "rv64*")


def test_discover_file_root_raises_discovery_error(tmp_path: Path) -> None:
    root = tmp_path / "file"
    root.write_text("", encoding="utf-8")

    with pytest.raises(DiscoveryError, match="not a directory"):
        discover(root, "*")


def test_discover_skips_unreadable_entries_with_warning(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    _touch(tmp_path, "a.riscv", "b.riscv")
    original_stat = Path.stat

    def _flaky_stat(self: Path, *args, **kwargs):
        if self.name == "a.riscv":
            raise PermissionError("denied")
        return original_stat(self, *args, **kwargs)

    monkeypatch.setattr(Path, "stat", _flaky_stat)
    with caplog.at_level(logging.WARNING):
        artifacts = discover(tmp_path, "*.riscv")

    assert artifacts == (Artifact(path=tmp_path / "b.riscv"),)
    assert "a.riscv" in caplog.text


def test_artifact_name_is_final_path_segment() -> None:
    assert Artifact(path=Path("/opt/riscv/isa/rv64ui-p-add")).name == "rv64ui-p-add"
