"""ConfigMap reference scanning for Pods.

Finds the ways a Pod depends on a ConfigMap: as a volume, through
``envFrom`` or through an env var's ``valueFrom.configMapKeyRef``.
"""

from __future__ import annotations

from kubemapper.graph.models import UsageKind
from kubemapper.models.resources import PodRecord


def scan_configmap_usage(pod: PodRecord, config_map_name: str) -> frozenset[UsageKind]:
    """Return the distinct ways *pod* references the ConfigMap *config_map_name*.

    Each usage kind is reported once, however many volumes or containers
    trigger it.
    """
    found: set[UsageKind] = set()

    for volume in pod.volumes:
        if volume.config_map_name == config_map_name:
            found.add(UsageKind.MOUNTED_AS_VOLUME)
            break

    for container in pod.containers:
        if any(src.config_map_name == config_map_name for src in container.env_from):
            found.add(UsageKind.USED_IN_ENV_FROM)
        for env in container.env:
            ref = env.config_map_key_ref
            if ref is not None and ref.name == config_map_name:
                found.add(UsageKind.USED_IN_ENVIRONMENT_VARIABLE)
                break

    return frozenset(found)
