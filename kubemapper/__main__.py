"""Entry point for `python -m kubemapper`.

Usage:
    python -m kubemapper
    python -m kubemapper --kubeconfig ~/.kube/staging -n default
"""

from __future__ import annotations

from kubemapper.cli import cli

cli()
