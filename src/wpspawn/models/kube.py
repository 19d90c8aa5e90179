"""Kubernetes core/v1 shaped models used for compiler input and output."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class KubeModel(BaseModel):
    """Base model for Kubernetes objects.

    Fields are snake_case in Python and camelCase on the wire. Instances are
    frozen so a compiled workload can be shared and compared structurally.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    def to_manifest(self) -> Dict[str, Any]:
        """Dump the non-default fields using their Kubernetes names."""
        return self.model_dump(by_alias=True, exclude_defaults=True)


class ObjectFieldSelector(KubeModel):
    """Downward API field reference."""
    field_path: str
    api_version: Optional[str] = None


class KeySelector(KubeModel):
    """Reference to a key of a secret or config map."""
    name: str
    key: str
    optional: Optional[bool] = None


class EnvVarSource(KubeModel):
    """Source for an environment variable value."""
    field_ref: Optional[ObjectFieldSelector] = None
    secret_key_ref: Optional[KeySelector] = None
    config_map_key_ref: Optional[KeySelector] = None


class EnvVar(KubeModel):
    """Environment variable for a container."""
    name: str
    value: Optional[str] = None
    value_from: Optional[EnvVarSource] = None


class LocalObjectReference(KubeModel):
    """Reference to an object in the same namespace."""
    name: str
    optional: Optional[bool] = None


class EnvFromSource(KubeModel):
    """Bulk environment injection from a secret or config map."""
    prefix: Optional[str] = None
    secret_ref: Optional[LocalObjectReference] = None
    config_map_ref: Optional[LocalObjectReference] = None


class VolumeMount(KubeModel):
    """Mount of a pod volume into a container."""
    name: str
    mount_path: str
    read_only: bool = False
    sub_path: Optional[str] = None


class EmptyDirVolumeSource(KubeModel):
    """Scratch volume living as long as the pod."""
    medium: Optional[str] = None
    size_limit: Optional[str] = None


class HostPathVolumeSource(KubeModel):
    """Directory on the node."""
    path: str
    type: Optional[str] = None


class PersistentVolumeClaimVolumeSource(KubeModel):
    """Reference to a persistent volume claim."""
    claim_name: str
    read_only: bool = False


class Volume(KubeModel):
    """Pod volume. Sources not modelled here are kept as extra fields."""
    name: str
    empty_dir: Optional[EmptyDirVolumeSource] = None
    host_path: Optional[HostPathVolumeSource] = None
    persistent_volume_claim: Optional[PersistentVolumeClaimVolumeSource] = None


class HTTPHeader(KubeModel):
    name: str
    value: str


class HTTPGetAction(KubeModel):
    path: Optional[str] = None
    port: Union[int, str]
    host: Optional[str] = None
    scheme: Optional[str] = None
    http_headers: List[HTTPHeader] = Field(default_factory=list)


class ExecAction(KubeModel):
    command: List[str] = Field(default_factory=list)


class Probe(KubeModel):
    """Container health check."""
    http_get: Optional[HTTPGetAction] = None
    exec_: Optional[ExecAction] = Field(default=None, alias="exec")
    tcp_socket: Optional[Dict[str, Any]] = None
    failure_threshold: Optional[int] = None
    initial_delay_seconds: Optional[int] = None
    period_seconds: Optional[int] = None
    success_threshold: Optional[int] = None
    timeout_seconds: Optional[int] = None


class LifecycleHandler(KubeModel):
    exec_: Optional[ExecAction] = Field(default=None, alias="exec")
    http_get: Optional[HTTPGetAction] = None


class Lifecycle(KubeModel):
    post_start: Optional[LifecycleHandler] = None
    pre_stop: Optional[LifecycleHandler] = None


class ContainerPort(KubeModel):
    name: Optional[str] = None
    container_port: int
    protocol: Optional[str] = None


class SecurityContext(KubeModel):
    """Container level security context."""
    run_as_user: Optional[int] = None
    run_as_group: Optional[int] = None
    run_as_non_root: Optional[bool] = None
    proc_mount: Optional[str] = None
    read_only_root_filesystem: Optional[bool] = None


class PodSecurityContext(KubeModel):
    """Pod level security context."""
    fs_group: Optional[int] = None
    run_as_user: Optional[int] = None
    run_as_group: Optional[int] = None


class Container(KubeModel):
    """Container definition, used for init steps, main process and sidecars."""
    name: str
    image: Optional[str] = None
    image_pull_policy: Optional[str] = None
    command: List[str] = Field(default_factory=list)
    args: List[str] = Field(default_factory=list)
    working_dir: Optional[str] = None
    env: List[EnvVar] = Field(default_factory=list)
    env_from: List[EnvFromSource] = Field(default_factory=list)
    volume_mounts: List[VolumeMount] = Field(default_factory=list)
    ports: List[ContainerPort] = Field(default_factory=list)
    resources: Dict[str, Any] = Field(default_factory=dict)
    security_context: Optional[SecurityContext] = None
    lifecycle: Optional[Lifecycle] = None
    readiness_probe: Optional[Probe] = None
    liveness_probe: Optional[Probe] = None


class ObjectMeta(KubeModel):
    """Subset of object metadata relevant to pod templates."""
    name: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)
    annotations: Dict[str, str] = Field(default_factory=dict)


class PodSpec(KubeModel):
    """Pod specification."""
    init_containers: List[Container] = Field(default_factory=list)
    containers: List[Container] = Field(default_factory=list)
    volumes: List[Volume] = Field(default_factory=list)
    restart_policy: Optional[str] = None
    service_account_name: Optional[str] = None
    image_pull_secrets: List[LocalObjectReference] = Field(default_factory=list)
    node_selector: Dict[str, str] = Field(default_factory=dict)
    tolerations: List[Dict[str, Any]] = Field(default_factory=list)
    affinity: Optional[Dict[str, Any]] = None
    priority_class_name: Optional[str] = None
    security_context: Optional[PodSecurityContext] = None


class PodTemplateSpec(KubeModel):
    """Resolved workload: metadata plus pod spec."""
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)
