import json

import pytest

from geoloop_cli.cli import load_polygon, main

SQUARE_GESTURE = """\
map_ready: true
events:
  - {type: start, x: 200, y: 150}
  - {type: move, x: 600, y: 150}
  - {type: move, x: 600, y: 450}
  - {type: move, x: 200, y: 450}
  - {type: end}
"""


@pytest.fixture
def polygon_file(tmp_path):
    path = tmp_path / "polygon.yaml"
    path.write_text(
        "polygon:\n"
        "  - {lat: 0, lon: 0}\n"
        "  - {lat: 0, lon: 2}\n"
        "  - [2, 2]\n"
        "  - {latitude: 2, longitude: 0}\n"
    )
    return path


@pytest.fixture
def gesture_file(tmp_path):
    path = tmp_path / "gesture.yaml"
    path.write_text(SQUARE_GESTURE)
    return path


def test_distance_defaults_to_ellipsoid(capsys):
    assert main(["distance", "0", "0", "1", "0"]) == 0
    meters = float(capsys.readouterr().out)
    assert meters == pytest.approx(110_574.4, abs=1.0)


def test_distance_haversine(capsys):
    assert main(["distance", "0", "0", "0", "1", "--calculator", "haversine"]) == 0
    meters = float(capsys.readouterr().out)
    assert meters == pytest.approx(110_946.26, rel=1e-4)


def test_distance_accepts_negative_coordinates(capsys):
    assert main(["distance", "51.5", "-0.1", "51.6", "-0.2"]) == 0
    meters = float(capsys.readouterr().out)
    assert 12_000 < meters < 14_000


def test_distance_invalid_latitude(capsys):
    assert main(["distance", "91", "0", "0", "0"]) == 1
    assert "Error" in capsys.readouterr().err


def test_load_polygon_accepts_mixed_vertices(polygon_file):
    polygon = load_polygon(str(polygon_file))
    assert [(p.lat, p.lon) for p in polygon] == [(0, 0), (0, 2), (2, 2), (2, 0)]


@pytest.mark.parametrize("lat, lon, expected", [
    ("1", "1", "inside"),
    ("3", "1", "outside"),
])
def test_contains(capsys, polygon_file, lat, lon, expected):
    assert main(["contains", str(polygon_file), lat, lon]) == 0
    assert capsys.readouterr().out.strip() == expected


def test_contains_missing_file(capsys, tmp_path):
    assert main(["contains", str(tmp_path / "missing.yaml"), "1", "1"]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_replay_completes_loop(capsys, gesture_file):
    assert main(["replay", str(gesture_file)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result['state']['status'] == "completed"
    assert result['state']['is_loop_closed'] is True
    assert result['was_dragged'] is True
    assert result['polygon_vertices'] == 4
    assert "render" not in result


def test_replay_renders_image(capsys, gesture_file, tmp_path):
    output = tmp_path / "out" / "loop.png"
    assert main(["replay", str(gesture_file), "--render", str(output)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result['render'] == str(output)
    assert output.exists()
    assert output.stat().st_size > 0


def test_replay_with_config(capsys, gesture_file, tmp_path):
    config = tmp_path / "geoloop.yaml"
    config.write_text("drawing:\n  min_point_separation_m: 1000000\n")

    assert main(["replay", str(gesture_file), "--config", str(config)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result['was_dragged'] is False
    assert result['polygon_vertices'] == 1


def test_replay_unknown_event_type(capsys, tmp_path):
    gesture = tmp_path / "bad.yaml"
    gesture.write_text("events:\n  - {type: pinch}\n")

    assert main(["replay", str(gesture)]) == 1
    assert "Unknown gesture event type" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()
