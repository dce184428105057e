"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ClusterConfig:
    """Cluster connection configuration."""

    kubeconfig_path: str = ""


@dataclass
class OutputConfig:
    """Terminal output configuration."""

    color: bool = True
    namespaces: tuple[str, ...] = ()  # empty means every namespace


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "warning"


@dataclass
class MapperConfig:
    """Top-level kubemapper configuration."""

    cluster: ClusterConfig = field(default_factory=ClusterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)
