"""CLI application entry point for sigv4.

This module is the **sole error boundary** for the entire application.
It catches :class:`~sigv4.exceptions.Sigv4Error`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering a one-line message on stderr
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; assembly, signing and dispatch are
  delegated to :class:`~sigv4.core.pipeline.RequestPipeline`.
* stdout receives only the rendered response, written once after the
  whole response has been buffered.  A failed invocation writes
  nothing to stdout.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO

from sigv4.cli import exit_codes
from sigv4.cli.console import (
    LOG_LEVEL_ENV,
    console,
    configure_logging,
    print_error,
    resolve_log_level,
    stream_is_terminal,
)
from sigv4.core.models import ColorMode, DisplayOptions, RequestOptions
from sigv4.core.pipeline import PipelineStage, RequestPipeline
from sigv4.exceptions import Sigv4Error
from sigv4.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser.

    Flags mirror curl where curl has an equivalent (``-X``, ``-H``,
    ``-d``, ``-i``).
    """
    parser = argparse.ArgumentParser(
        prog="sigv4",
        description="Sign AWS SigV4 requests like a prod.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-r",
        "--region",
        default="us-east-1",
        help="Region name used for signing (default: %(default)s).",
    )
    parser.add_argument(
        "-s",
        "--service",
        default="execute-api",
        help="Service name used for signing (default: %(default)s).",
    )
    parser.add_argument(
        "-X",
        "--request",
        dest="method",
        default="GET",
        metavar="METHOD",
        help="HTTP method (default: %(default)s).",
    )
    parser.add_argument(
        "-i",
        "--include",
        dest="include_headers",
        action="store_true",
        help="Include the status line and response headers in the output.",
    )
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=None,
        metavar="KEY:VALUE",
        help="Request header; may be repeated. Tokens without a colon are ignored.",
    )
    parser.add_argument(
        "-d",
        "--data",
        default=None,
        help="Request body: literal text, @path to read a file, or @- for stdin.",
    )
    parser.add_argument(
        "--color",
        choices=[mode.value for mode in ColorMode],
        default=ColorMode.AUTO.value,
        help="Colorize output (default: %(default)s).",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="AWS profile to load credentials from.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Give up if the server does not respond in time (default: wait forever).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help=f"Debug logging on stderr (or set {LOG_LEVEL_ENV}=<level>).",
    )
    parser.add_argument(
        "uri",
        help="Endpoint URI to send the signed request to.",
    )
    return parser


def request_options(args: argparse.Namespace) -> RequestOptions:
    """Map parsed arguments onto :class:`RequestOptions`."""
    return RequestOptions(
        uri=args.uri,
        region=args.region,
        service=args.service,
        method=args.method,
        header_tokens=tuple(args.headers or ()),
        data=args.data,
    )


def display_options(args: argparse.Namespace) -> DisplayOptions:
    """Map parsed arguments onto :class:`DisplayOptions`."""
    return DisplayOptions(
        include_headers=args.include_headers,
        color_mode=ColorMode(args.color),
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _build_pipeline(args: argparse.Namespace) -> RequestPipeline:
    """Wire the botocore signer and requests transport into a pipeline."""
    from sigv4.infra.botocore_signer import BotocoreCredentialsProvider, BotocoreSigner
    from sigv4.infra.requests_transport import RequestsTransport

    return RequestPipeline(
        signer=BotocoreSigner(),
        transport=RequestsTransport(timeout=args.timeout),
        credentials=BotocoreCredentialsProvider(profile=args.profile),
    )


def _stdin_buffer() -> BinaryIO | None:
    """Binary stdin, or ``None`` when the process was started without one."""
    return getattr(sys.stdin, "buffer", None)


def _write_stdout(text: str) -> None:
    """Write *text* to stdout as UTF-8 bytes, whatever the locale says."""
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8"))
    sys.stdout.buffer.flush()


def _handle_request(args: argparse.Namespace) -> int:
    """Send one signed request and write the rendered response to stdout.

    Flow:
    1. Assemble, sign and dispatch via the pipeline.
    2. Render the buffered response.
    3. Write it, followed by a single newline.
    """
    from sigv4.cli.render import render_response

    pipeline = _build_pipeline(args)
    response = pipeline.execute(request_options(args), stdin=_stdin_buffer())

    logger.debug("Pipeline stage: %s", PipelineStage.RENDERING.value)
    rendered = render_response(
        response,
        display_options(args),
        is_terminal=stream_is_terminal(sys.stdout),
    )
    _write_stdout(rendered + "\n")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the sigv4 CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.  Any rendered response is a success, even
        a 4xx or 5xx one.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(resolve_log_level(args.verbose, os.environ.get(LOG_LEVEL_ENV)))
    return _handle_request(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except Sigv4Error as exc:
        logger.debug("Request failed", exc_info=True)
        print_error(str(exc), hint=exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        print_error(f"Unexpected error. Please report this issue. {type(exc).__name__}: {exc}")
        sys.exit(exit_codes.UNEXPECTED_ERROR)
