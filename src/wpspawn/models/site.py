"""Site (intent) specification models."""

import posixpath
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from wpspawn.models.kube import (
    Container,
    EmptyDirVolumeSource,
    EnvFromSource,
    EnvVar,
    HostPathVolumeSource,
    KubeModel,
    LocalObjectReference,
    ObjectMeta,
    Probe,
    Volume,
    VolumeMount,
)


DEFAULT_CODE_MOUNT_PATH = "/app/web/wp-content"
DEFAULT_CODE_CONTENT_SUB_PATH = "wp-content/"
DEFAULT_CODE_CONFIG_SUB_PATH = "config/"
DEFAULT_CODE_SRC_MOUNT_PATH = "/var/run/presslabs.org/code/src"
DEFAULT_CODE_CONFIG_MOUNT_PATH = "/app/config"
DEFAULT_MEDIA_MOUNT_PATH = DEFAULT_CODE_MOUNT_PATH + "/uploads"
DEFAULT_WORDPRESS_PATH_PREFIX = "/wp"

SECRET_COMPONENT = "wp"
CODE_CLAIM_COMPONENT = "code"
MEDIA_CLAIM_COMPONENT = "media"


def join_path(*parts: str) -> str:
    """Join slash separated path elements, ignoring empty ones.

    Leading slashes of inner elements do not reset the path, so
    ``join_path("example.com", "/blog")`` is ``"example.com/blog"``.
    """
    elements = [p for p in parts if p]
    if not elements:
        return ""
    joined = "/".join(elements)
    return posixpath.normpath(joined).replace("//", "/")


class IntentModel(KubeModel):
    """Base for user authored site fields. Unknown keys are rejected."""
    model_config = ConfigDict(extra="forbid")


class Route(IntentModel):
    """Domain and path the site is served on."""
    domain: str
    path: str = "/"


class GitVolumeSource(IntentModel):
    """Code fetched from a git repository into an ephemeral volume."""
    repository: str
    reference: Optional[str] = None
    env: List[EnvVar] = Field(default_factory=list)
    env_from: List[EnvFromSource] = Field(default_factory=list)
    empty_dir: Optional[EmptyDirVolumeSource] = None


class CodeVolumeSpec(IntentModel):
    """Code volume as authored by the user.

    At most one of ``git``, ``persistent_volume_claim``, ``host_path`` and
    ``empty_dir`` is expected to be set; when several are, the first one in
    that order wins.
    """
    read_only: bool = False
    mount_path: str = DEFAULT_CODE_MOUNT_PATH
    content_sub_path: str = DEFAULT_CODE_CONTENT_SUB_PATH
    config_sub_path: str = DEFAULT_CODE_CONFIG_SUB_PATH
    src_mount_path: str = DEFAULT_CODE_SRC_MOUNT_PATH
    config_mount_path: str = DEFAULT_CODE_CONFIG_MOUNT_PATH
    git: Optional[GitVolumeSource] = None
    persistent_volume_claim: Optional[Dict[str, Any]] = None
    host_path: Optional[HostPathVolumeSource] = None
    empty_dir: Optional[EmptyDirVolumeSource] = None


class S3VolumeSource(IntentModel):
    """S3 compatible bucket holding the media files."""
    bucket: str
    path_prefix: str = ""
    env: List[EnvVar] = Field(default_factory=list)


class GCSVolumeSource(IntentModel):
    """Google Cloud Storage bucket holding the media files."""
    bucket: str
    path_prefix: str = ""
    env: List[EnvVar] = Field(default_factory=list)


class MediaVolumeSpec(IntentModel):
    """Media storage as authored by the user.

    ``s3``/``gcs`` describe a remote backend and only produce environment
    variables. ``persistent_volume_claim``/``host_path``/``empty_dir`` decide
    what gets mounted.
    """
    read_only: bool = False
    mount_path: str = DEFAULT_MEDIA_MOUNT_PATH
    content_sub_path: str = ""
    s3: Optional[S3VolumeSource] = None
    gcs: Optional[GCSVolumeSource] = None
    persistent_volume_claim: Optional[Dict[str, Any]] = None
    host_path: Optional[HostPathVolumeSource] = None
    empty_dir: Optional[EmptyDirVolumeSource] = None


class BootstrapSpec(IntentModel):
    """Initial install parameters.

    The title, user, password and email are read by the install step from the
    ``WORDPRESS_BOOTSTRAP_*`` variables supplied here.
    """
    env: List[EnvVar] = Field(default_factory=list)
    env_from: List[EnvFromSource] = Field(default_factory=list)


class SiteSpec(IntentModel):
    """Desired state of a WordPress site."""
    image: str
    image_pull_policy: Optional[str] = None
    image_pull_secrets: List[LocalObjectReference] = Field(default_factory=list)
    resources: Dict[str, Any] = Field(default_factory=dict)
    domain: Optional[str] = None
    tls_secret_ref: Optional[str] = None
    wordpress_path_prefix: str = DEFAULT_WORDPRESS_PATH_PREFIX
    routes: List[Route] = Field(default_factory=list)
    env: List[EnvVar] = Field(default_factory=list)
    env_from: List[EnvFromSource] = Field(default_factory=list)
    volume_mounts: List[VolumeMount] = Field(default_factory=list)
    volumes: List[Volume] = Field(default_factory=list)
    sidecars: List[Container] = Field(default_factory=list)
    init_containers: List[Container] = Field(default_factory=list)
    node_selector: Dict[str, str] = Field(default_factory=dict)
    tolerations: List[Dict[str, Any]] = Field(default_factory=list)
    affinity: Optional[Dict[str, Any]] = None
    priority_class_name: Optional[str] = None
    service_account_name: Optional[str] = None
    pod_metadata: Optional[ObjectMeta] = None
    code: Optional[CodeVolumeSpec] = None
    media: Optional[MediaVolumeSpec] = None
    bootstrap: Optional[BootstrapSpec] = None
    readiness_probe: Optional[Probe] = None
    liveness_probe: Optional[Probe] = None


class SiteMetadata(KubeModel):
    """Identity of the site resource."""
    name: str
    namespace: str = "default"
    labels: Dict[str, str] = Field(default_factory=dict)


class Site(KubeModel):
    """A site resource: metadata plus spec, with derived naming helpers."""
    metadata: SiteMetadata
    spec: SiteSpec

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def component_name(self, component: str) -> str:
        """Name of an object generated for this site."""
        return f"{self.name}-{component}"

    @property
    def main_domain(self) -> str:
        """Canonical primary domain of the site."""
        if self.spec.routes:
            return self.spec.routes[0].domain
        if self.spec.domain:
            return self.spec.domain
        return f"{self.name}.{self.namespace}.svc"

    @property
    def main_path(self) -> str:
        if self.spec.routes and self.spec.routes[0].path:
            return self.spec.routes[0].path
        return "/"

    def home_url(self, *sub_paths: str) -> str:
        """Public URL of the site, without a trailing slash."""
        scheme = "https" if self.spec.tls_secret_ref else "http"
        path = join_path(self.main_path, *sub_paths)
        if path in ("", "/"):
            return f"{scheme}://{self.main_domain}"
        if not path.startswith("/"):
            path = "/" + path
        return f"{scheme}://{self.main_domain}{path.rstrip('/')}"

    def site_url(self, *sub_paths: str) -> str:
        """URL of the WordPress core directory."""
        return self.home_url(self.spec.wordpress_path_prefix, *sub_paths)

    def routes(self) -> List[str]:
        """Routes as ``domain/path`` strings, or the main domain alone."""
        if not self.spec.routes:
            return [self.main_domain]
        return [join_path(r.domain, r.path) for r in self.spec.routes]
