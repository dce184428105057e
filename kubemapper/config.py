"""Configuration loading from environment variables and CLI overrides."""

from __future__ import annotations

import os
from pathlib import Path

from kubemapper.models.config import ClusterConfig, LogConfig, MapperConfig, OutputConfig

_DEFAULT_KUBECONFIG = Path("~/.kube/config")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"KUBEMAPPER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def resolve_kubeconfig(override: str | None = None) -> str:
    """Resolve the kubeconfig path.

    Precedence: explicit override, then the first entry of ``KUBECONFIG``,
    then ``~/.kube/config``. The file is not required to exist here; the
    collector reports a missing file as a connectivity failure.
    """
    if override:
        return str(Path(override).expanduser())
    env_value = os.environ.get("KUBECONFIG", "")
    for entry in env_value.split(os.pathsep):
        if entry:
            return str(Path(entry).expanduser())
    return str(_DEFAULT_KUBECONFIG.expanduser())


def load_config(
    kubeconfig: str | None = None,
    log_level: str | None = None,
    color: bool | None = None,
    namespaces: tuple[str, ...] = (),
) -> MapperConfig:
    """Load configuration from KUBEMAPPER_* environment variables.

    Explicit arguments (normally CLI flags) take precedence over the environment.
    """
    return MapperConfig(
        cluster=ClusterConfig(kubeconfig_path=resolve_kubeconfig(kubeconfig)),
        output=OutputConfig(
            color=_env_bool("COLOR", True) if color is None else color,
            namespaces=tuple(namespaces),
        ),
        log=LogConfig(
            level=_validate_log_level(log_level or _env("LOG_LEVEL", "warning")),
        ),
    )
