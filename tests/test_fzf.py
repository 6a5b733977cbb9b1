from pathlib import Path
from types import SimpleNamespace

import pytest

import rideadda.util.fzf as fzf
from rideadda.errors import FzfNotFoundError, SelectionError


def test_missing_fzf_raises(monkeypatch):
    monkeypatch.setattr(fzf, "which", lambda _cmd: None)
    with pytest.raises(FzfNotFoundError):
        fzf.fzf_select_paths([Path("a.gpx")], header="x")


def test_selection_parses_full_paths(tmp_path: Path, monkeypatch):
    a = tmp_path / "a.gpx"
    b = tmp_path / "b.gpx"
    calls = []

    def fake_run(cmd, input, stdout, stderr):
        calls.append((cmd, input))
        return SimpleNamespace(returncode=0, stdout=f"b.gpx\t{b}\n".encode(), stderr=b"")

    monkeypatch.setattr(fzf, "which", lambda _cmd: "/usr/bin/fzf")
    monkeypatch.setattr(fzf.subprocess, "run", fake_run)

    assert fzf.fzf_select_paths([a, b], header="Pick") == [b.resolve()]
    cmd, stdin = calls[0]
    assert "--multi" in cmd
    assert stdin == f"a.gpx\t{a}\nb.gpx\t{b}\n".encode()


def test_abort_returns_nothing(monkeypatch):
    monkeypatch.setattr(fzf, "which", lambda _cmd: "/usr/bin/fzf")
    monkeypatch.setattr(
        fzf.subprocess, "run",
        lambda *a, **k: SimpleNamespace(returncode=130, stdout=b"", stderr=b""),
    )
    assert fzf.fzf_select_paths([Path("a.gpx")], header="x") == []


def test_fzf_failure_raises(monkeypatch):
    monkeypatch.setattr(fzf, "which", lambda _cmd: "/usr/bin/fzf")
    monkeypatch.setattr(
        fzf.subprocess, "run",
        lambda *a, **k: SimpleNamespace(returncode=2, stdout=b"", stderr=b"boom"),
    )
    with pytest.raises(SelectionError):
        fzf.fzf_select_paths([Path("a.gpx")], header="x")
