"""Error taxonomy for kubemapper.

ConnectivityError -- the control plane cannot be reached or the namespace
                     list cannot be read; fatal for the whole run.
RetrievalError    -- a single list call for one namespace failed; only that
                     namespace is abandoned.

Referential gaps (an Ingress naming a missing Service, a selector matching no
Pods) are valid graph states and never raise.
"""

from __future__ import annotations


class MapperError(Exception):
    """Base class for every error raised by kubemapper."""


class ConnectivityError(MapperError):
    """Raised when the cluster connection cannot be established."""


class RetrievalError(MapperError):
    """Raised when listing one resource kind in one namespace fails."""

    def __init__(self, kind: str, namespace: str, cause: Exception) -> None:
        super().__init__(f"failed to list {kind} in namespace '{namespace}': {cause}")
        self.kind = kind
        self.namespace = namespace
        self.cause = cause
