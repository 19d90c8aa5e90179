"""Volume and mount planning."""

import logging
from typing import List, Optional

from wpspawn.compiler.sources import (
    ClaimSource,
    CodeSource,
    EphemeralSource,
    GitCodeSource,
    HostPathSource,
    MediaMountSource,
    resolve_code_source,
    resolve_media_source,
)
from wpspawn.compiler.stages import StagedList
from wpspawn.models.kube import (
    EmptyDirVolumeSource,
    PersistentVolumeClaimVolumeSource,
    Volume,
    VolumeMount,
)
from wpspawn.models.site import CODE_CLAIM_COMPONENT, MEDIA_CLAIM_COMPONENT, Site


logger = logging.getLogger(__name__)

CODE_VOLUME_NAME = "code"
MEDIA_VOLUME_NAME = "media"

KNATIVE_INTERNAL_VOLUME = "knative-internal"
KNATIVE_INTERNAL_MOUNT_PATH = "/var/knative-internal"
KNATIVE_VAR_LOG_VOLUME = "knative-var-log"
KNATIVE_VAR_LOG_MOUNT_PATH = "/var/log"
VAR_LOG_SIZE_LIMIT = "1Gi"


def _source_volume(name: str, claim_name: str, source) -> Volume:
    if isinstance(source, GitCodeSource):
        return Volume(name=name, empty_dir=source.git.empty_dir or EmptyDirVolumeSource())
    if isinstance(source, ClaimSource):
        return Volume(
            name=name,
            persistent_volume_claim=PersistentVolumeClaimVolumeSource(claim_name=claim_name),
        )
    if isinstance(source, HostPathSource):
        return Volume(name=name, host_path=source.host_path)
    if isinstance(source, EphemeralSource):
        return Volume(name=name, empty_dir=source.empty_dir)
    raise TypeError(f"Unknown volume source: {source!r}")


def code_volume(site: Site, source: Optional[CodeSource] = None) -> Optional[Volume]:
    if source is None:
        source = resolve_code_source(site)
    if source is None:
        return None
    return _source_volume(CODE_VOLUME_NAME, site.component_name(CODE_CLAIM_COMPONENT), source)


def media_volume(site: Site, source: Optional[MediaMountSource] = None) -> Optional[Volume]:
    if source is None:
        source = resolve_media_source(site)
    if source is None:
        return None
    return _source_volume(MEDIA_VOLUME_NAME, site.component_name(MEDIA_CLAIM_COMPONENT), source)


def auxiliary_volumes() -> List[Volume]:
    """Scratch and log volumes present on every pod."""
    return [
        Volume(name=KNATIVE_INTERNAL_VOLUME, empty_dir=EmptyDirVolumeSource()),
        Volume(
            name=KNATIVE_VAR_LOG_VOLUME,
            empty_dir=EmptyDirVolumeSource(size_limit=VAR_LOG_SIZE_LIMIT),
        ),
    ]


def volume_stages(site: Site) -> StagedList[Volume]:
    code = code_volume(site)
    media = media_volume(site)
    return (
        StagedList()
        .add("auxiliary", auxiliary_volumes())
        .add("user", site.spec.volumes)
        .add("code", [code] if code is not None else [])
        .add("media", [media] if media is not None else [])
    )


def volumes(site: Site) -> List[Volume]:
    return volume_stages(site).build()


def code_mounts(site: Site) -> List[VolumeMount]:
    """One code volume seen three ways: fetch destination, content, config."""
    if resolve_code_source(site) is None:
        return []

    spec = site.spec.code
    return [
        VolumeMount(
            name=CODE_VOLUME_NAME,
            mount_path=spec.src_mount_path,
            read_only=spec.read_only,
        ),
        VolumeMount(
            name=CODE_VOLUME_NAME,
            mount_path=spec.mount_path,
            read_only=spec.read_only,
            sub_path=spec.content_sub_path or None,
        ),
        VolumeMount(
            name=CODE_VOLUME_NAME,
            mount_path=spec.config_mount_path,
            read_only=True,
            sub_path=spec.config_sub_path or None,
        ),
    ]


def media_mounts(site: Site) -> List[VolumeMount]:
    if resolve_media_source(site) is None:
        return []

    spec = site.spec.media
    return [
        VolumeMount(
            name=MEDIA_VOLUME_NAME,
            mount_path=spec.mount_path,
            read_only=spec.read_only,
            sub_path=spec.content_sub_path or None,
        )
    ]


def volume_mount_stages(site: Site) -> StagedList[VolumeMount]:
    """Main process mounts: log, user mounts, code views, media."""
    log = VolumeMount(name=KNATIVE_VAR_LOG_VOLUME, mount_path=KNATIVE_VAR_LOG_MOUNT_PATH)
    return (
        StagedList()
        .add("log", [log])
        .add("user", site.spec.volume_mounts)
        .add("code", code_mounts(site))
        .add("media", media_mounts(site))
    )


def volume_mounts(site: Site) -> List[VolumeMount]:
    return volume_mount_stages(site).build()
