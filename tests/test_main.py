"""Tests for the command line inspector."""

import sys

import pytest

from tmx_maps.__main__ import main


@pytest.fixture
def maps_dir(tmp_path, tmx, write_map):
    body = tmx.csv_layer("Ground", [1, 2, 3, 4 | 0x80000000])
    write_map("town.tmx", tmx.document(body, class_name="town"))
    return tmp_path


def run(monkeypatch, *args) -> None:
    monkeypatch.setattr(sys, "argv", ["tmx_maps", *map(str, args)])
    main()


def test_lists_maps(monkeypatch, capsys, maps_dir) -> None:
    run(monkeypatch, maps_dir)
    out = capsys.readouterr().out
    assert "town" in out
    assert "2x2" in out


def test_shows_map(monkeypatch, capsys, maps_dir) -> None:
    run(monkeypatch, maps_dir, "town")
    out = capsys.readouterr().out
    assert "layer 'Ground' 2x2 visible" in out
    assert "firstgid=1" in out


def test_prints_layer_grid(monkeypatch, capsys, maps_dir) -> None:
    run(monkeypatch, maps_dir, "town", "Ground")
    lines = capsys.readouterr().out.splitlines()
    assert lines[1].split() == ["1", "2"]
    assert lines[2].split() == ["3", "4"]


def test_unknown_map_exits_with_error(monkeypatch, capsys, maps_dir) -> None:
    with pytest.raises(SystemExit) as info:
        run(monkeypatch, maps_dir, "castle")
    assert info.value.code == 1
    assert "map not found" in capsys.readouterr().out


def test_missing_directory(monkeypatch, capsys, tmp_path) -> None:
    with pytest.raises(SystemExit) as info:
        run(monkeypatch, tmp_path / "missing")
    assert info.value.code == 1
