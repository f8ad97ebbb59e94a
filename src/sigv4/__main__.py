"""Allow ``python -m sigv4`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m sigv4`` behaves identically to the ``sigv4`` console
script.
"""

from __future__ import annotations

from sigv4.cli.app import cli

if __name__ == "__main__":
    cli()
