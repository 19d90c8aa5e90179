"""Resolution of mutually exclusive volume sources.

A site may set several of the optional source fields of its code or media
volume. Exactly one of them is used, picked by a fixed priority order;
conflicts are resolved silently.
"""

import logging
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from wpspawn.models.kube import EmptyDirVolumeSource, EnvVar, HostPathVolumeSource
from wpspawn.models.site import GitVolumeSource, Site


logger = logging.getLogger(__name__)


class SourceModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class GitCodeSource(SourceModel):
    """Code cloned from git into an ephemeral volume."""
    kind: Literal["git"] = "git"
    git: GitVolumeSource


class ClaimSource(SourceModel):
    """Persistent volume claim owned by the site."""
    kind: Literal["claim"] = "claim"
    claim_spec: Dict[str, Any] = Field(default_factory=dict)


class HostPathSource(SourceModel):
    kind: Literal["host_path"] = "host_path"
    host_path: HostPathVolumeSource


class EphemeralSource(SourceModel):
    kind: Literal["ephemeral"] = "ephemeral"
    empty_dir: EmptyDirVolumeSource = Field(default_factory=EmptyDirVolumeSource)


CodeSource = Union[GitCodeSource, ClaimSource, HostPathSource, EphemeralSource]
MediaMountSource = Union[ClaimSource, HostPathSource, EphemeralSource]


class MediaBackend(SourceModel):
    """Remote object storage holding media files."""
    kind: Literal["s3", "gcs"]
    bucket: str
    path_prefix: str = ""
    env: List[EnvVar] = Field(default_factory=list)


def _mount_source(spec) -> Optional[MediaMountSource]:
    """Shared claim > hostPath > ephemeral resolution."""
    if spec.persistent_volume_claim is not None:
        return ClaimSource(claim_spec=spec.persistent_volume_claim)
    if spec.host_path is not None:
        return HostPathSource(host_path=spec.host_path)
    if spec.empty_dir is not None:
        return EphemeralSource(empty_dir=spec.empty_dir)
    return None


def _set_fields(spec, names: List[str]) -> List[str]:
    return [name for name in names if getattr(spec, name) is not None]


def resolve_code_source(site: Site) -> Optional[CodeSource]:
    """Pick the code source: git > claim > hostPath > ephemeral.

    Returns None when no variant is set; code volumes are never defaulted.
    """
    spec = site.spec.code
    if spec is None:
        return None

    candidates = _set_fields(
        spec, ["git", "persistent_volume_claim", "host_path", "empty_dir"]
    )
    if len(candidates) > 1:
        logger.debug(
            f"Site {site.name} sets several code sources {candidates}, using {candidates[0]}"
        )

    if spec.git is not None:
        return GitCodeSource(git=spec.git)
    return _mount_source(spec)


def resolve_media_backend(site: Site) -> Optional[MediaBackend]:
    """Pick the remote media backend: s3 > gcs."""
    spec = site.spec.media
    if spec is None:
        return None

    if spec.s3 is not None:
        if spec.gcs is not None:
            logger.debug(f"Site {site.name} sets both s3 and gcs media, using s3")
        return MediaBackend(
            kind="s3",
            bucket=spec.s3.bucket,
            path_prefix=spec.s3.path_prefix,
            env=spec.s3.env,
        )
    if spec.gcs is not None:
        return MediaBackend(
            kind="gcs",
            bucket=spec.gcs.bucket,
            path_prefix=spec.gcs.path_prefix,
            env=spec.gcs.env,
        )
    return None


def resolve_media_source(site: Site) -> Optional[MediaMountSource]:
    """Pick the media mount source: claim > hostPath > ephemeral.

    Media that is only described by a remote backend still gets an ephemeral
    volume. Returns None when the site has no media at all.
    """
    spec = site.spec.media
    if spec is None:
        return None

    candidates = _set_fields(spec, ["persistent_volume_claim", "host_path", "empty_dir"])
    if len(candidates) > 1:
        logger.debug(
            f"Site {site.name} sets several media sources {candidates}, using {candidates[0]}"
        )

    source = _mount_source(spec)
    if source is not None:
        return source
    if resolve_media_backend(site) is not None:
        return EphemeralSource()
    return None


def has_code_mounts(site: Site) -> bool:
    return resolve_code_source(site) is not None


def has_media_mounts(site: Site) -> bool:
    return resolve_media_source(site) is not None


def git_source(site: Site) -> Optional[GitVolumeSource]:
    """The git spec when git is the winning code source."""
    source = resolve_code_source(site)
    if isinstance(source, GitCodeSource):
        return source.git
    return None
