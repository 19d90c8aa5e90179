"""Compilation of site definitions into pod templates."""

from wpspawn.compiler.assembler import PodTemplateAssembler, job_pod_template, web_pod_template
from wpspawn.compiler.registry import ShapeRegistry, get_shape_registry
from wpspawn.compiler.shapes import JobShape, WebShape, WorkloadShape
from wpspawn.compiler.stages import Stage, StagedList

__all__ = [
    "PodTemplateAssembler",
    "job_pod_template",
    "web_pod_template",
    "ShapeRegistry",
    "get_shape_registry",
    "JobShape",
    "WebShape",
    "WorkloadShape",
    "Stage",
    "StagedList",
]
