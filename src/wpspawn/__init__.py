"""
wpspawn - WordPress site to pod template compiler.

Turns a declarative site definition into the pod templates of its serving
deployment and of one-shot wp-cli jobs.
"""

__version__ = "1.0.0"

# Re-export key components for easier access
from wpspawn.compiler import PodTemplateAssembler, job_pod_template, web_pod_template
from wpspawn.models.config import SpawnConfig
from wpspawn.models.kube import PodTemplateSpec
from wpspawn.models.site import Site, SiteSpec

__all__ = [
    "PodTemplateAssembler",
    "job_pod_template",
    "web_pod_template",
    "SpawnConfig",
    "PodTemplateSpec",
    "Site",
    "SiteSpec",
]
