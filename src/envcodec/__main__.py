# topmark:header:start
#
#   project      : EnvCodec
#   file         : __main__.py
#   file_relpath : src/envcodec/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running EnvCodec via ``python -m envcodec``.

It delegates directly to :func:`envcodec.cli.main.cli`, so the module form and
the ``envcodec`` console script share a single CLI entry point.

Examples:
    Decode the current environment into a settings class::

        python -m envcodec decode myapp.settings:Settings --prefix APP__
"""

from __future__ import annotations

from envcodec.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
