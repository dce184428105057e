"""kubemapper command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``kubemapper`` script).
"""

from kubemapper.cli.main import cli

__all__ = ["cli"]
