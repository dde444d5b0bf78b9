import json

import numpy as np
from PIL import Image

import extract_theme


def _write_png(path, rgb):
    arr = np.empty((4, 4, 3), dtype=np.uint8)
    arr[:2] = rgb
    arr[2:] = (255, 255, 255)
    Image.fromarray(arr).save(path)
    return path


def test_single_file_report(tmp_path, capsys):
    path = _write_png(tmp_path / "red.png", (255, 0, 0))
    assert extract_theme.main([str(path)]) == 0
    out = capsys.readouterr().out
    assert "=== red.png ===" in out
    assert "#ff8080" in out  # average of red and white halves
    assert "Vibrant" in out


def test_json_output(tmp_path, capsys):
    path = _write_png(tmp_path / "blue.png", (0, 0, 255))
    assert extract_theme.main([str(path), "--json", "--max-swatches", "4"]) == 0
    record = json.loads(capsys.readouterr().out.strip())
    assert record["file"] == "blue.png"
    assert record["theme"]["average_color"]["hex"] == "#8080ff"
    assert record["targets"]["Vibrant"] == {"hex": "#0000ff", "population": 8}
    assert len(record["swatches"]) == 2


def test_folder_parallel_keeps_order(tmp_path, capsys):
    _write_png(tmp_path / "b.png", (0, 0, 255))
    _write_png(tmp_path / "a.png", (255, 0, 0))
    (tmp_path / "notes.txt").write_text("skip me")
    assert extract_theme.main([str(tmp_path), "--json", "--jobs", "2"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [json.loads(line)["file"] for line in lines] == ["a.png", "b.png"]


def test_missing_path(tmp_path, capsys):
    assert extract_theme.main([str(tmp_path / "nope.png")]) == 2
    assert "not found" in capsys.readouterr().err


def test_invalid_bits(tmp_path, capsys):
    path = _write_png(tmp_path / "red.png", (255, 0, 0))
    assert extract_theme.main([str(path), "--bits", "0"]) == 2
    assert "histogram_bits" in capsys.readouterr().err
