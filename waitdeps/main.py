"""Wait for network dependencies to become available, then run a command.

    wait-for-dependencies [options] URL [URL ...] [-- command [args ...]]
"""

import argparse
import logging
import os
import signal
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from waitdeps.core.config import Settings
from waitdeps.core.errors import ClassificationError
from waitdeps.core.logging import LOGGER_NAME, configure_logging
from waitdeps.models.enums import ExitCode
from waitdeps.services.classifier import classify
from waitdeps.workers.orchestrator import RunOrchestrator

USAGE_EXIT_STATUS = 1
NO_ARGUMENTS_EXIT_STATUS = 255

logger = logging.getLogger(LOGGER_NAME)


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="wait-for-dependencies",
        description="Poll http(s)://, ftp://, postgres:// and tcp:// targets until they are available.",
        epilog="Supported URLs: http://host[:port]/path, https://..., ftp://..., "
        "postgres://[user@]host[:port], tcp://host:port",
        add_help=False,
    )
    parser.add_argument("urls", nargs="*", metavar="URL")
    parser.add_argument("-h", "--help", action="store_true", help="show this help and exit")
    parser.add_argument("-t", "--timeout", type=float, dest="script_timeout", help="overall timeout in seconds (0 = none)")
    parser.add_argument(
        "-c", "--connection-timeout", type=float, dest="connect_timeout", help="timeout per attempt in seconds"
    )
    parser.add_argument("-p", "--poll-interval", type=float, dest="poll_interval", help="seconds between attempts")
    parser.add_argument("-v", "--verbose", action="store_const", const=True, dest="verbose", help="report progress")
    parser.add_argument("-q", "--quiet", action="store_const", const=False, dest="verbose", help="report failures only")
    parser.add_argument("-C", "--colour", action="store_const", const=True, dest="colour", help="force coloured output")
    return parser


def split_command(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    argv = list(argv)
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1 :]
    return argv, []


def load_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        name: getattr(args, name)
        for name in ("script_timeout", "connect_timeout", "poll_interval", "verbose", "colour")
        if getattr(args, name) is not None
    }
    return Settings(**overrides)


def _usage(parser: argparse.ArgumentParser, message: str | None = None) -> int:
    parser.print_usage(sys.stderr)
    if message:
        print(f"{parser.prog}: error: {message}", file=sys.stderr)
    return USAGE_EXIT_STATUS


def exec_command(command: list[str]) -> int:
    """Replace the current process with ``command``; only returns when exec fails."""
    logger.info("Executing: %s", " ".join(command))
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execvp(command[0], command)
    except FileNotFoundError:
        logger.error("Command not found: %s", command[0])
        return ExitCode.COMMAND_NOT_FOUND
    except OSError as exc:
        logger.error("Cannot execute %s: %s", command[0], exc)
        return ExitCode.COMMAND_NOT_EXECUTABLE
    return ExitCode.SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    if not argv:
        parser.print_help(sys.stderr)
        return NO_ARGUMENTS_EXIT_STATUS

    options, command = split_command(argv)
    try:
        args = parser.parse_intermixed_args(options)
    except UsageError as exc:
        return _usage(parser, str(exc))
    if args.help:
        parser.print_help(sys.stderr)
        return USAGE_EXIT_STATUS
    if not args.urls:
        return _usage(parser, "at least one URL is required")

    try:
        settings = load_settings(args)
    except ValidationError as exc:
        details = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
        return _usage(parser, details)

    configure_logging(settings.verbose, settings.colour)

    try:
        targets = [classify(url) for url in args.urls]
    except ClassificationError as exc:
        logger.error("%s (exit %d)", exc, exc.exit_code)
        return exc.exit_code

    previous_sigterm = signal.signal(signal.SIGTERM, signal.default_int_handler)
    try:
        result = RunOrchestrator(settings).run(targets, command)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return ExitCode.INTERRUPTED
    finally:
        signal.signal(signal.SIGTERM, previous_sigterm)

    if not result.success:
        return result.exit_code
    if result.command:
        return exec_command(result.command)
    return ExitCode.SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
