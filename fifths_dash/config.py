"""Configuration loading and the built-in dashboard dataset."""

import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigError
from .radial import CLOCK_POSITIONS, LayoutSpace, RadialPoint, Ring, clock_angle

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

CONFIG_ENV_VAR = "FIFTHS_DASH_CONFIG"
DEFAULT_CONFIG_PATH = Path(".fifths-dash") / "config.yaml"
DEFAULT_LOG_PATH = Path(".fifths-dash") / "logs" / "dashboard.log"

DEFAULT_POLL_INTERVAL = 0.2  # seconds between ticks when no key arrives
MAX_POLL_INTERVAL = 5.0

DEFAULT_MENU = [
    (
        "Circle of fifths",
        "The twelve major keys arranged so that each step clockwise "
        "moves up a perfect fifth.\n"
        "Outer ring: major keys. Middle ring: their relative minors. "
        "Inner ring: the key signature.\n"
        "Neighbouring keys differ by a single sharp or flat, which makes "
        "them the closest keys to modulate to.\n"
        "Going anti-clockwise moves up a perfect fourth instead.\n"
        "F# and Gb sit at the same position: the circle closes through "
        "enharmonic spelling.",
    ),
    (
        "Harmonic",
        "The harmonic minor scale raises the seventh degree of the natural "
        "minor by a semitone.\n"
        "That leading tone gives the minor key a major dominant chord "
        "(V), which makes cadences resolve strongly to the tonic.\n"
        "A harmonic minor: A B C D E F G# A.\n"
        "The gap between the sixth and the raised seventh is an augmented "
        "second.",
    ),
]

DEFAULT_RINGS = [
    Ring("major", 180.0),
    Ring("minor", 120.0),
    Ring("signature", 60.0),
]

# Clock order, starting at 12 o'clock and running clockwise.
MAJOR_KEYS = ["C", "G", "D", "A", "E", "B", "F#/Gb", "Db", "Ab", "Eb", "Bb", "F"]
MINOR_KEYS = ["Am", "Em", "Bm", "F#m", "C#m", "G#m", "D#m", "Bbm", "Fm", "Cm", "Gm", "Dm"]
SIGNATURES = ["0", "1#", "2#", "3#", "4#", "5#", "6#/6b", "5b", "4b", "3b", "2b", "1b"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_points() -> list[RadialPoint]:
    """The circle-of-fifths table: three rings sharing twelve positions."""
    points = []
    for ring, labels in (
        ("major", MAJOR_KEYS),
        ("minor", MINOR_KEYS),
        ("signature", SIGNATURES),
    ):
        for position, label in enumerate(labels):
            points.append(RadialPoint(label, ring, clock_angle(position)))
    return points


@dataclass
class DashboardConfig:
    """Everything the dashboard needs at startup."""
    poll_interval: float = DEFAULT_POLL_INTERVAL
    layout_space: LayoutSpace = field(default_factory=LayoutSpace)
    items: list[str] = field(default_factory=lambda: [m[0] for m in DEFAULT_MENU])
    infos: list[str] = field(default_factory=lambda: [m[1] for m in DEFAULT_MENU])
    rings: dict[str, Ring] = field(
        default_factory=lambda: {r.name: r for r in DEFAULT_RINGS})
    points: list[RadialPoint] = field(default_factory=default_points)
    log_level: str = "WARNING"
    log_file: Path = DEFAULT_LOG_PATH
    source: Path | None = None  # config file this was read from, if any


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def find_config_path(explicit: str | Path | None = None) -> Path | None:
    """Resolve which config file to read.

    Order: explicit path, FIFTHS_DASH_CONFIG env var, ./.fifths-dash/config.yaml.
    An explicit path or env var is returned even if missing, so the loader
    can report it; the default location is only used when it exists.
    """
    if explicit:
        return Path(explicit)
    env_override = os.environ.get(CONFIG_ENV_VAR)
    if env_override:
        return Path(env_override)
    default = Path.cwd() / DEFAULT_CONFIG_PATH
    if default.exists():
        return default
    return None


def load_config(path: str | Path | None = None) -> DashboardConfig:
    """Load the dashboard config, falling back to built-in defaults.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or malformed.
    """
    config_path = find_config_path(path)
    if config_path is None:
        logger.info("no config file found, using built-in defaults")
        return DashboardConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"cannot read config: {e.strerror}", str(config_path)) from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"invalid encoding, expected UTF-8: {e.reason}", str(config_path)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", str(config_path)) from e

    if not isinstance(data, dict):
        raise ConfigError("top level must be a mapping", str(config_path))

    try:
        config = parse_config(data)
    except ConfigError as e:
        raise ConfigError(str(e), str(config_path)) from e
    config.source = config_path
    logger.info("loaded config from %s", config_path)
    return config


def parse_config(data: dict[str, Any]) -> DashboardConfig:
    """Build a DashboardConfig from an already-parsed YAML mapping."""
    config = DashboardConfig()

    if "poll_interval" in data:
        config.poll_interval = _parse_poll_interval(data["poll_interval"])
    if "layout_space" in data:
        config.layout_space = _parse_layout_space(data["layout_space"])
    if "menu" in data:
        config.items, config.infos = _parse_menu(data["menu"])
    if "rings" in data:
        config.rings = _parse_rings(data["rings"])
    if "points" in data:
        config.points = _parse_points(data["points"])

    unknown = {p.ring for p in config.points} - set(config.rings)
    if unknown:
        raise ConfigError(f"points refer to unknown rings: {', '.join(sorted(unknown))}")

    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        config.log_level = level
    if "log_file" in data:
        config.log_file = Path(data["log_file"])

    return config


def _parse_poll_interval(value: Any) -> float:
    try:
        interval = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"poll_interval must be a number, got {value!r}")
    if not 0 < interval <= MAX_POLL_INTERVAL:
        raise ConfigError(f"poll_interval must be in (0, {MAX_POLL_INTERVAL}]")
    return interval


def _parse_range(value: Any, axis: str) -> tuple[float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"layout_space.{axis} must be a [min, max] pair")
    try:
        low, high = float(value[0]), float(value[1])
    except (TypeError, ValueError):
        raise ConfigError(f"layout_space.{axis} bounds must be numbers")
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ConfigError(f"layout_space.{axis} bounds must be finite")
    if low >= high:
        raise ConfigError(f"layout_space.{axis} min must be below max")
    return low, high


def _parse_layout_space(value: Any) -> LayoutSpace:
    if not isinstance(value, dict):
        raise ConfigError("layout_space must be a mapping with x and y")
    x_min, x_max = _parse_range(value.get("x"), "x")
    y_min, y_max = _parse_range(value.get("y"), "y")
    return LayoutSpace(x_min, x_max, y_min, y_max)


def _parse_menu(value: Any) -> tuple[list[str], list[str]]:
    """Split menu entries into the parallel items/infos lists.

    The menu may also be given as two lists under ``items`` and ``infos``.
    Their lengths are not checked here: SelectListState.set_items owns that
    invariant.
    """
    if isinstance(value, dict):
        items = value.get("items") or []
        infos = value.get("infos") or []
        if not isinstance(items, list) or not isinstance(infos, list):
            raise ConfigError("menu.items and menu.infos must be lists")
        return [str(i) for i in items], [str(i) for i in infos]

    if not isinstance(value, list):
        raise ConfigError("menu must be a list of {item, info} entries")
    items, infos = [], []
    for entry in value:
        if not isinstance(entry, dict) or "item" not in entry:
            raise ConfigError(f"menu entry needs an 'item' key: {entry!r}")
        items.append(str(entry["item"]))
        infos.append(str(entry.get("info", "")))
    return items, infos


def _parse_rings(value: Any) -> dict[str, Ring]:
    if not isinstance(value, list) or not value:
        raise ConfigError("rings must be a non-empty list")
    rings: dict[str, Ring] = {}
    for entry in value:
        if not isinstance(entry, dict) or "name" not in entry or "radius" not in entry:
            raise ConfigError(f"ring needs 'name' and 'radius': {entry!r}")
        try:
            radius = float(entry["radius"])
        except (TypeError, ValueError):
            raise ConfigError(f"ring radius must be a number: {entry!r}")
        if not (math.isfinite(radius) and radius > 0):
            raise ConfigError(f"ring radius must be a positive finite number: {entry!r}")
        name = str(entry["name"])
        rings[name] = Ring(name, radius)
    return rings


def _parse_points(value: Any) -> list[RadialPoint]:
    if not isinstance(value, list):
        raise ConfigError("points must be a list")
    points = []
    for entry in value:
        if not isinstance(entry, dict) or "label" not in entry or "ring" not in entry:
            raise ConfigError(f"point needs 'label' and 'ring': {entry!r}")
        has_position = "position" in entry
        has_angle = "angle" in entry
        if has_position == has_angle:
            raise ConfigError(f"point needs exactly one of 'position' or 'angle': {entry!r}")
        try:
            if has_position:
                raw_position = float(entry["position"])
            else:
                angle = float(entry["angle"])
        except (TypeError, ValueError):
            raise ConfigError(f"point position/angle must be a number: {entry!r}")
        if has_position:
            if not raw_position.is_integer():
                raise ConfigError(f"point position must be a whole number: {entry!r}")
            position = int(raw_position)
            if not 0 <= position < CLOCK_POSITIONS:
                raise ConfigError(
                    f"point position must be 0..{CLOCK_POSITIONS - 1}: {entry!r}")
            angle = clock_angle(position)
        elif not math.isfinite(angle):
            raise ConfigError(f"point angle must be finite: {entry!r}")
        points.append(RadialPoint(str(entry["label"]), str(entry["ring"]), angle))
    return points
