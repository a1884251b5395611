"""
CLI entry point for the secure-filters command.

Encodes a single value for one output context, e.g.::

    secure-filters html '<script>'
    echo '{"a": "</script>"}' | secure-filters --json jsObj
"""

import argparse
import logging
import sys

from .config import (
    AdapterConfig,
    FilterConfigError,
    default_config_path,
    load_adapter_config,
)
from .filters import FILTER_NAMES, SerializationError, get_filter
from .utils.safe_json import safe_json_loads
from .version import __version__

logger = logging.getLogger("secure_filters.cli")


# =============================================================================
# INPUT
# =============================================================================

def _read_value(args) -> str:
    """The value argument, or stdin without its final line ending."""
    if args.value is not None:
        return args.value
    data = sys.stdin.read()
    if data.endswith("\r\n"):
        return data[:-2]
    if data.endswith("\n"):
        return data[:-1]
    return data


def _resolve_filter_name(name: str, config: AdapterConfig) -> str:
    return config.aliases.get(name, name)


# =============================================================================
# MAIN
# =============================================================================

def main(argv=None) -> int:
    """Entry point for the secure-filters command."""
    parser = argparse.ArgumentParser(
        prog="secure-filters",
        description="Encode a value for safe embedding in HTML, JS, URI, JSON or CSS",
        epilog="Exit codes: 0=ok, 1=value could not be encoded, 2=bad filter or config",
    )
    parser.add_argument("filter", nargs="?",
                        help=f"Filter name or configured alias ({', '.join(FILTER_NAMES)})")
    parser.add_argument("value", nargs="?",
                        help="Value to encode (default: read from stdin)")
    parser.add_argument("--json", action="store_true",
                        help="Parse the value as JSON before encoding")
    parser.add_argument("--config",
                        help="Adapter config YAML (default: $SECURE_FILTERS_CONFIG)")
    parser.add_argument("--list", action="store_true",
                        help="List filter names and configured aliases")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug output to stderr")
    parser.add_argument("--version", action="version",
                        version=f"secure-filters {__version__}")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config_path = args.config or default_config_path()
    try:
        config = load_adapter_config(config_path) if config_path else AdapterConfig()
    except FilterConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.list:
        for name in FILTER_NAMES:
            print(name)
        for alias, target in config.aliases.items():
            print(f"{alias} -> {target}")
        return 0

    if not args.filter:
        parser.print_usage(sys.stderr)
        print("Error: a filter name is required", file=sys.stderr)
        return 2

    name = _resolve_filter_name(args.filter, config)
    try:
        fn = get_filter(name)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 2
    logger.debug("Using filter '%s' for '%s'", name, args.filter)

    raw = _read_value(args)
    if args.json:
        try:
            value = safe_json_loads(raw)
        except ValueError as e:
            print(f"Error: Invalid JSON input: {e}", file=sys.stderr)
            return 1
    else:
        value = raw

    try:
        output = fn(value)
    except SerializationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
