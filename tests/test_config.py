"""Tests for fifths_dash.config: YAML loading, validation and defaults."""

from pathlib import Path

import pytest
import yaml

from fifths_dash.config import (
    CONFIG_ENV_VAR,
    DEFAULT_POLL_INTERVAL,
    DashboardConfig,
    default_points,
    find_config_path,
    load_config,
    parse_config,
)
from fifths_dash.exceptions import ConfigError
from fifths_dash.radial import LayoutSpace, clock_angle


@pytest.fixture(autouse=True)
def _isolate(monkeypatch, tmp_path):
    """Run each test from an empty directory with no env override."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)


def _write(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data)
    return path


class TestDefaults:

    def test_built_in_menu(self):
        config = DashboardConfig()
        assert config.items == ["Circle of fifths", "Harmonic"]
        assert len(config.infos) == len(config.items)

    def test_built_in_rings(self):
        config = DashboardConfig()
        assert set(config.rings) == {"major", "minor", "signature"}
        radii = [config.rings[n].radius for n in ("major", "minor", "signature")]
        assert radii == sorted(radii, reverse=True)

    def test_default_points_share_positions(self):
        points = default_points()
        assert len(points) == 36
        c, am, zero = points[0], points[12], points[24]
        assert (c.label, am.label, zero.label) == ("C", "Am", "0")
        assert c.angle == am.angle == zero.angle == clock_angle(0)

    def test_instances_do_not_share_lists(self):
        a, b = DashboardConfig(), DashboardConfig()
        a.items.append("extra")
        assert "extra" not in b.items


class TestFindConfigPath:

    def test_none_when_nothing_configured(self):
        assert find_config_path() is None

    def test_explicit_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/from/env.yaml")
        assert find_config_path("given.yaml") == Path("given.yaml")

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/from/env.yaml")
        assert find_config_path() == Path("/from/env.yaml")

    def test_default_location(self, tmp_path):
        path = _write(tmp_path / ".fifths-dash" / "config.yaml", {"poll_interval": 0.1})
        assert find_config_path() == path


class TestLoadConfig:

    def test_defaults_without_file(self):
        config = load_config()
        assert config.poll_interval == DEFAULT_POLL_INTERVAL
        assert config.source is None

    def test_reads_file(self, tmp_path):
        path = _write(tmp_path / "c.yaml", {
            "poll_interval": 0.1,
            "layout_space": {"x": [-100, 100], "y": [-50, 50]},
            "menu": [
                {"item": "Circle of fifth", "info": "fifths"},
                {"item": "Harmonic"},
            ],
            "log_level": "debug",
            "log_file": "logs/out.log",
        })
        config = load_config(path)
        assert config.poll_interval == 0.1
        assert config.layout_space == LayoutSpace(-100, 100, -50, 50)
        assert config.items == ["Circle of fifth", "Harmonic"]
        assert config.infos == ["fifths", ""]
        assert config.log_level == "DEBUG"
        assert config.log_file == Path("logs/out.log")
        assert config.source == path

    def test_empty_file_gives_defaults(self, tmp_path):
        path = _write(tmp_path / "c.yaml", "")
        assert load_config(path).items == DashboardConfig().items

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read config"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path / "c.yaml", "menu: [unclosed")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_bytes(b"menu:\n  - item: \"\xff\xfe\"\n")
        with pytest.raises(ConfigError, match="invalid encoding") as exc_info:
            load_config(path)
        assert exc_info.value.path == str(path)

    def test_non_mapping(self, tmp_path):
        path = _write(tmp_path / "c.yaml", "- just\n- a list\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_error_names_the_file(self, tmp_path):
        path = _write(tmp_path / "c.yaml", {"poll_interval": -1})
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        assert str(path) in str(exc_info.value)
        assert exc_info.value.path == str(path)


class TestParseConfig:

    @pytest.mark.parametrize("value", [0, -0.5, 10, "fast", None])
    def test_bad_poll_interval(self, value):
        with pytest.raises(ConfigError):
            parse_config({"poll_interval": value})

    @pytest.mark.parametrize("space", [
        {"x": [1, -1], "y": [-1, 1]},
        {"x": [0], "y": [-1, 1]},
        {"x": ["a", "b"], "y": [-1, 1]},
        {"x": [float("-inf"), float("inf")], "y": [-1, 1]},
        {"x": [-1, 1], "y": [float("nan"), 1]},
        [1, 2],
    ])
    def test_bad_layout_space(self, space):
        with pytest.raises(ConfigError):
            parse_config({"layout_space": space})

    def test_menu_as_parallel_lists(self):
        config = parse_config({"menu": {"items": ["a", "b"], "infos": ["x", "y"]}})
        assert config.items == ["a", "b"]
        assert config.infos == ["x", "y"]

    def test_menu_length_mismatch_is_passed_through(self):
        # The list state rejects it, not the config loader.
        config = parse_config({"menu": {"items": ["a", "b"], "infos": ["x"]}})
        assert len(config.items) != len(config.infos)

    def test_menu_entry_without_item(self):
        with pytest.raises(ConfigError, match="item"):
            parse_config({"menu": [{"info": "orphan"}]})

    def test_custom_rings_and_points(self):
        config = parse_config({
            "rings": [{"name": "outer", "radius": 150}],
            "points": [
                {"label": "C", "ring": "outer", "position": 0},
                {"label": "X", "ring": "outer", "angle": 45},
            ],
        })
        assert config.rings["outer"].radius == 150
        assert [p.angle for p in config.points] == [90, 45]

    def test_whole_float_position_accepted(self):
        config = parse_config({"points": [{"label": "G", "ring": "major", "position": 1.0}]})
        assert config.points[0].angle == clock_angle(1)

    def test_infinite_bounds_read_from_yaml(self, tmp_path):
        path = _write(tmp_path / "c.yaml", "layout_space:\n  x: [-.inf, .inf]\n  y: [-1, 1]\n")
        with pytest.raises(ConfigError, match="finite"):
            load_config(path)

    def test_points_need_known_ring(self):
        with pytest.raises(ConfigError, match="unknown rings"):
            parse_config({"points": [{"label": "C", "ring": "nowhere", "position": 0}]})

    def test_custom_rings_must_cover_default_points(self):
        with pytest.raises(ConfigError, match="unknown rings"):
            parse_config({"rings": [{"name": "outer", "radius": 150}]})

    @pytest.mark.parametrize("point", [
        {"label": "C", "ring": "major"},
        {"label": "C", "ring": "major", "position": 0, "angle": 90},
        {"label": "C", "ring": "major", "position": 12},
        {"label": "C", "ring": "major", "angle": "north"},
        {"label": "C", "ring": "major", "position": 1.7},
        {"label": "C", "ring": "major", "angle": float("inf")},
        {"ring": "major", "position": 0},
    ])
    def test_bad_points(self, point):
        with pytest.raises(ConfigError):
            parse_config({"points": [point]})

    @pytest.mark.parametrize("ring", [
        {"name": "r"},
        {"name": "r", "radius": 0},
        {"name": "r", "radius": "big"},
        {"name": "r", "radius": float("inf")},
    ])
    def test_bad_rings(self, ring):
        with pytest.raises(ConfigError):
            parse_config({"rings": [ring], "points": []})

    def test_bad_log_level(self):
        with pytest.raises(ConfigError, match="log_level"):
            parse_config({"log_level": "LOUD"})
