"""Conversion of kubernetes_asyncio API models into resource records.

Only the fields relationship mapping reads are copied. Optional API fields
(``None`` in the client models) become empty containers so downstream code
never has to null-check.
"""

from __future__ import annotations

from typing import Any

from kubemapper.models.resources import (
    ConfigMapKeyRef,
    ConfigMapRecord,
    Container,
    DeploymentRecord,
    EnvFromSource,
    EnvVar,
    IngressPath,
    IngressRecord,
    IngressRule,
    PodPhase,
    PodRecord,
    ServiceRecord,
    Volume,
)


def _labels(obj: Any) -> dict[str, str]:
    return dict(obj.metadata.labels or {})


def to_deployment(obj: Any) -> DeploymentRecord:
    spec = obj.spec
    status = obj.status
    return DeploymentRecord(
        name=obj.metadata.name,
        replicas=spec.replicas if spec is not None else None,
        available_replicas=(status.available_replicas or 0) if status is not None else 0,
    )


def to_service(obj: Any) -> ServiceRecord:
    spec = obj.spec
    return ServiceRecord(
        name=obj.metadata.name,
        labels=_labels(obj),
        selector=dict(spec.selector or {}),
        service_type=spec.type or "ClusterIP",
        cluster_ip=spec.cluster_ip or "",
        # The generated client spells externalIPs as external_ips.
        external_ips=tuple(spec.external_ips or ()),
    )


def _ingress_rule(rule: Any) -> IngressRule:
    paths = []
    if rule.http is not None:
        for http_path in rule.http.paths or ():
            backend_service = http_path.backend.service if http_path.backend is not None else None
            # Resource backends route to a non-Service object; they produce no edge.
            if backend_service is None:
                continue
            paths.append(IngressPath(path=http_path.path or "/", service_name=backend_service.name))
    return IngressRule(host=rule.host or "", paths=tuple(paths))


def to_ingress(obj: Any) -> IngressRecord:
    rules = obj.spec.rules if obj.spec is not None else None
    return IngressRecord(
        name=obj.metadata.name,
        rules=tuple(_ingress_rule(rule) for rule in rules or ()),
    )


def _volume(vol: Any) -> Volume:
    config_map = vol.config_map
    return Volume(name=vol.name, config_map_name=config_map.name if config_map is not None else None)


def _env_var(env: Any) -> EnvVar:
    key_ref = env.value_from.config_map_key_ref if env.value_from is not None else None
    if key_ref is None:
        return EnvVar(name=env.name)
    return EnvVar(name=env.name, config_map_key_ref=ConfigMapKeyRef(name=key_ref.name, key=key_ref.key or ""))


def _container(container: Any) -> Container:
    env_from = tuple(
        EnvFromSource(config_map_name=src.config_map_ref.name if src.config_map_ref is not None else None)
        for src in container.env_from or ()
    )
    return Container(
        name=container.name,
        env_from=env_from,
        env=tuple(_env_var(env) for env in container.env or ()),
    )


def to_pod(obj: Any) -> PodRecord:
    spec = obj.spec
    phase = obj.status.phase if obj.status is not None else None
    return PodRecord(
        name=obj.metadata.name,
        labels=_labels(obj),
        phase=PodPhase.parse(phase),
        node_name=spec.node_name or None,
        volumes=tuple(_volume(vol) for vol in spec.volumes or ()),
        containers=tuple(_container(c) for c in spec.containers or ()),
    )


def to_config_map(obj: Any) -> ConfigMapRecord:
    return ConfigMapRecord(name=obj.metadata.name)
