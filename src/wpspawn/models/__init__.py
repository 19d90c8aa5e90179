"""Pydantic models for configuration, site intent and resolved workloads."""

from wpspawn.models.config import SpawnConfig, ImageConfig
from wpspawn.models.kube import (
    Container,
    EnvFromSource,
    EnvVar,
    PodTemplateSpec,
    Probe,
    Volume,
    VolumeMount,
)
from wpspawn.models.site import (
    BootstrapSpec,
    CodeVolumeSpec,
    GCSVolumeSource,
    GitVolumeSource,
    MediaVolumeSpec,
    Route,
    S3VolumeSource,
    Site,
    SiteMetadata,
    SiteSpec,
)

__all__ = [
    "SpawnConfig",
    "ImageConfig",
    "Container",
    "EnvFromSource",
    "EnvVar",
    "PodTemplateSpec",
    "Probe",
    "Volume",
    "VolumeMount",
    "BootstrapSpec",
    "CodeVolumeSpec",
    "GCSVolumeSource",
    "GitVolumeSource",
    "MediaVolumeSpec",
    "Route",
    "S3VolumeSource",
    "Site",
    "SiteMetadata",
    "SiteSpec",
]
