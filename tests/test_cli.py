"""Tests for the command-line interface."""

import sys
from pathlib import Path

import pytest

from zonegen.cli import main, render_room_map, render_tile_map
from zonegen.config import ZoneGenConfig
from zonegen.orchestrator import run_zone


@pytest.fixture
def tiny_config(tmp_path: Path) -> Path:
    path = tmp_path / "tiny.toml"
    path.write_text("[graph]\nmax_distance = 3\n\n[orchestrator]\nroom_length = 16\n")
    return path


def test_render_room_map(small_config: ZoneGenConfig) -> None:
    layout = run_zone(seed=4, config=small_config)
    lines = render_room_map(layout).splitlines()

    assert len(lines) == layout.graph.size
    assert all(len(line) == layout.graph.size for line in lines)
    # Starter sits in the middle of the map
    middle = layout.graph.max_distance
    assert lines[middle][middle] == "S"
    assert "".join(lines).count("B") == 1


def test_render_tile_map(small_config: ZoneGenConfig) -> None:
    layout = run_zone(seed=4, config=small_config)
    lines = render_tile_map(layout, step=4).splitlines()
    side = layout.combined_layout.shape[0] // 4
    assert len(lines) == side
    assert set("".join(lines)) <= {"~", "#", "o", "="}


def test_main(tiny_config: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    monkeypatch.setattr(
        sys, "argv", ["zonegen", "--seed", "3", "--config", str(tiny_config), "--tiles"]
    )
    main()
    out = capsys.readouterr().out
    assert "Zone 0.0 with seed 3" in out
    assert "starter: 1" in out
    assert "Validation passed" in out


def test_main_missing_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["zonegen", "--config", "no_such_config"])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 1
