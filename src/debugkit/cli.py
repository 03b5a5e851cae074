"""Demo executable for debugkit.

Reads a file and reports on it through topic-gated diagnostics:

    debugkit-demo notes.txt                     # no diagnostics
    debugkit-demo notes.txt --debug info error  # info + error lines
    debugkit-demo notes.txt -d all              # everything
    debugkit-demo notes.txt -d error --timestamps

The mask comes from --debug when given, otherwise from the project
config (.debugkit.json, or the file named with --config).
"""

import argparse
import sys
from pathlib import Path

from debugkit._version import VERSION
from debugkit.config import resolve_mask
from debugkit.emitter import dbg_always, init_emitter
from debugkit.errors import DecodeError, UnknownTopic
from debugkit.registry import TopicRegistry
from debugkit.topic import Topic


# ---------------------------------------------------------------------------
# Demo topics
# ---------------------------------------------------------------------------
INFO = Topic(0, "info")
WARNING = Topic(1, "warning")
ERROR = Topic(2, "error")
CRITICAL = Topic(3, "critical")

DEMO_TOPIC_DESCRIPTIONS = {
    INFO: "Progress and results",
    WARNING: "Recoverable oddities",
    ERROR: "Failures",
    CRITICAL: "Failures that stop the run",
}


def build_registry():
    """Registry of the demo topics, in level order."""
    registry = TopicRegistry()
    for topic, description in DEMO_TOPIC_DESCRIPTIONS.items():
        registry.register(topic, description)
    return registry


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
def _build_parser(registry):
    parser = argparse.ArgumentParser(
        prog="debugkit-demo",
        description="debugkit demo: topic-gated diagnostics on stderr",
        epilog="Topics may also be given as a bare level (0-63) or 'all'.",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"debugkit-demo {VERSION}",
    )
    parser.add_argument(
        "--debug", "-d",
        nargs="+", action="extend", default=[], metavar="level",
        help=("Enable debugging. Available levels: "
              + ", ".join(registry.labels())),
    )
    parser.add_argument("--config", metavar="PATH", default=None,
                        help="Mask config file (default: nearest .debugkit.json)")
    parser.add_argument("--timestamps", action="store_true", default=False,
                        help="Prefix diagnostics with a local timestamp")
    parser.add_argument("--list-topics", action="store_true", default=False,
                        help="List available topics and exit")
    parser.add_argument("file", nargs="?", help="File to read")
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for debugkit-demo.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success, 1 = file not readable, 2 = usage/config error).
    """
    if argv is None:
        argv = sys.argv[1:]

    registry = build_registry()
    parser = _build_parser(registry)
    args = parser.parse_args(argv)

    if args.list_topics:
        print(registry.format_topic_list())
        return 0

    if args.file is None:
        parser.print_usage(sys.stderr)
        return 2

    try:
        mask = resolve_mask(args.debug, registry, config_path=args.config)
    except (UnknownTopic, DecodeError) as e:
        dbg_always(str(e), ERROR)
        return 2

    out = init_emitter(mask=mask)
    emit = out.dlog if args.timestamps else out.dbg

    for topic in registry:
        emit(topic, f"{topic.label}-level debugging active")
    emit(INFO, lambda: f"active mask: {mask}")

    path = Path(args.file)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        emit(ERROR, f"File '{args.file}' not found")
        return 1
    except OSError as e:
        emit(CRITICAL, f"File '{args.file}' cannot be read: {e.strerror}")
        return 1

    lines = data.count(b"\n")
    if data and not data.endswith(b"\n"):
        emit(WARNING, f"File '{args.file}' has no trailing newline")
    emit(INFO, lambda: f"File '{args.file}' read ({len(data)} bytes)")
    print(f"{args.file}: {lines} lines, {len(data)} bytes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
