"""fifths-dash command line entry point."""

import argparse
import curses
import locale
import logging
import sys

from . import __version__
from .config import LOG_LEVELS, MAX_POLL_INTERVAL, DashboardConfig, load_config
from .dashboard import Dashboard
from .exceptions import ConfigError
from .radial import layout_points

logger = logging.getLogger("fifths_dash")


def _fmt_table(rows: list[list[str]], headers: list[str]) -> str:
    """Format rows as a simple aligned table."""
    all_rows = [headers] + rows
    widths = [max(len(r[i]) for r in all_rows) for i in range(len(headers))]
    lines = []
    lines.append("  ".join(h.ljust(w) for h, w in zip(headers, widths)))
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(c.ljust(w) for c, w in zip(row, widths)))
    return "\n".join(lines)


def dump_layout(config: DashboardConfig) -> str:
    """Placed diagram labels as a table, for checking a config without a terminal."""
    placed = layout_points(config.points, config.rings)
    rows = []
    for point, label in zip(config.points, placed):
        rows.append([
            point.ring,
            point.label,
            f"{point.angle:g}",
            f"{label.x:.1f}",
            f"{label.y:.1f}",
        ])
    return _fmt_table(rows, ["RING", "LABEL", "ANGLE", "X", "Y"])


def setup_logging(config: DashboardConfig) -> None:
    """Log to a file: curses owns the terminal while the dashboard runs."""
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(config.log_file),
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fifths-dash",
        description="Circle-of-fifths terminal dashboard",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=str,
                        help="Path to config.yaml (default: .fifths-dash/config.yaml)")
    parser.add_argument("--poll-interval", type=float,
                        help="Seconds to wait for a key before redrawing anyway")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        help="Log level for the dashboard log file")
    parser.add_argument("--dump-layout", action="store_true",
                        help="Print the placed diagram labels and exit")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.poll_interval is not None:
        if not 0 < args.poll_interval <= MAX_POLL_INTERVAL:
            parser.error(f"--poll-interval must be in (0, {MAX_POLL_INTERVAL}]")
        config.poll_interval = args.poll_interval
    if args.log_level:
        config.log_level = args.log_level

    if args.dump_layout:
        print(dump_layout(config))
        return

    setup_logging(config)
    logger.info("starting fifths-dash %s (config: %s)",
                __version__, config.source or "built-in defaults")

    locale.setlocale(locale.LC_ALL, "")
    dashboard = Dashboard(config)
    try:
        curses.wrapper(dashboard.run)
    except Exception:
        logger.exception("Dashboard crashed")
        raise


if __name__ == "__main__":
    main()
