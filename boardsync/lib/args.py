import argparse
import logging

from boardsync.constants import DEFAULT_REALTIME_URL, DEFAULT_SERVER_PORT

# Default values for CLI args
default_port = DEFAULT_SERVER_PORT
default_host = "0.0.0.0"
default_log_level = logging.INFO
default_url = DEFAULT_REALTIME_URL


def parse_log_level(level):
    """Accept either a numeric level or a level name such as "debug"."""
    if isinstance(level, int):
        return level
    level = str(level).strip()
    if level.isascii() and level.isdecimal():
        return int(level)
    parsed = logging.getLevelName(level.upper())
    if isinstance(parsed, int):
        return parsed
    print(f"[ERROR] Unknown log level: {level}. Setting to default: {default_log_level}")
    return default_log_level


def _add_common_args(parser):
    parser.add_argument(
        "-l",
        "--log-level",
        help=f"Logging level, name or int value (DEBUG: 10, INFO: 20, WARNING: 30, ERROR: 40, CRITICAL: 50). (default: {default_log_level} )",
        default=default_log_level,
        type=parse_log_level,
        required=False,
    )
    parser.add_argument(
        "--production",
        help="Run with the production configuration (silences diagnostics for unhandled events)",
        action="store_true",
        required=False,
    )
    parser.add_argument(
        "--log-dir",
        help="Directory for log files. (default: platform log directory)",
        default=None,
        required=False,
    )


def parse_server_args(argv=None):
    parser = argparse.ArgumentParser(description="Board realtime broadcast server")

    parser.add_argument(
        "-p",
        "--port",
        help="Desired http port (default: %d)" % default_port,
        default=default_port,
        type=int,
        required=False,
    )
    parser.add_argument(
        "--host",
        help="Interface to bind to (default: %s)" % default_host,
        default=default_host,
        required=False,
    )
    _add_common_args(parser)
    return parser.parse_args(argv)


def parse_listen_args(argv=None):
    parser = argparse.ArgumentParser(description="Listen to board realtime events")

    parser.add_argument(
        "-u",
        "--url",
        help="Realtime server url (default: %s)" % default_url,
        default=default_url,
        required=False,
    )
    parser.add_argument(
        "--user-id",
        help="Subscribe to this user's private notification channel",
        default=None,
        required=False,
    )
    parser.add_argument(
        "-b",
        "--board-id",
        help="Board whose channel to subscribe to",
        default=None,
        required=False,
    )
    parser.add_argument(
        "-t",
        "--token",
        help="Signed channel token; required for the private notification channel",
        default=None,
        required=False,
    )
    _add_common_args(parser)
    return parser.parse_args(argv)
