"""Pod template assembly for the web and job workload shapes."""

import logging
from typing import Dict, Optional, Sequence, Union

from wpspawn.compiler.init_steps import init_containers
from wpspawn.compiler.registry import ShapeRegistry, get_shape_registry
from wpspawn.compiler.shapes import WorkloadShape
from wpspawn.compiler.volumes import volumes
from wpspawn.models.config import SpawnConfig
from wpspawn.models.kube import ObjectMeta, PodSpec, PodTemplateSpec
from wpspawn.models.site import Site
from wpspawn.utils.templates import merge_labels


logger = logging.getLogger(__name__)

PART_OF_LABEL = "app.kubernetes.io/part-of"


def site_labels(site: Site) -> Dict[str, str]:
    """Labels identifying all objects of a site."""
    return {
        "app.kubernetes.io/name": "wordpress",
        PART_OF_LABEL: site.metadata.labels.get(PART_OF_LABEL) or "wordpress",
        "app.kubernetes.io/instance": site.name,
    }


def component_labels(site: Site, component: str) -> Dict[str, str]:
    return merge_labels(site_labels(site), {"app.kubernetes.io/component": component})


class PodTemplateAssembler:
    """Compiles a site into a pod template for a given workload shape."""

    def __init__(self, config: Optional[SpawnConfig] = None, registry: Optional[ShapeRegistry] = None):
        self.config = config or SpawnConfig()
        self.registry = registry or get_shape_registry()

    def _shape(self, shape: Union[str, WorkloadShape]) -> WorkloadShape:
        if isinstance(shape, WorkloadShape):
            return shape
        resolved = self.registry.get_shape(shape)
        if resolved is None:
            raise ValueError(f"Unknown workload shape: {shape}")
        return resolved

    def metadata(self, site: Site, shape: WorkloadShape) -> ObjectMeta:
        """Pod metadata from the site, with computed labels on top."""
        base = site.spec.pod_metadata or ObjectMeta()
        return base.model_copy(
            update={"labels": merge_labels(base.labels, component_labels(site, shape.component))},
            deep=True,
        )

    def assemble(
        self,
        site: Site,
        shape: Union[str, WorkloadShape] = "web",
        command: Sequence[str] = (),
    ) -> PodTemplateSpec:
        """Build the pod template of ``site`` for ``shape``."""
        shape = self._shape(shape)
        spec = site.spec

        # Placement fields are only set when the site sets them.
        pod_fields = {}
        if spec.service_account_name:
            pod_fields["service_account_name"] = spec.service_account_name
        if spec.node_selector:
            pod_fields["node_selector"] = spec.node_selector
        if spec.tolerations:
            pod_fields["tolerations"] = spec.tolerations
        if spec.affinity is not None:
            pod_fields["affinity"] = spec.affinity
        if spec.priority_class_name:
            pod_fields["priority_class_name"] = spec.priority_class_name

        pod_spec = PodSpec(
            init_containers=init_containers(site, self.config),
            containers=[shape.main_container(site, command)] + list(spec.sidecars),
            volumes=volumes(site),
            restart_policy=shape.restart_policy,
            image_pull_secrets=spec.image_pull_secrets,
            security_context=shape.pod_security_context(),
            **pod_fields,
        )

        logger.debug(
            f"Assembled {shape.name} pod template for site {site.namespace}/{site.name}"
        )
        return PodTemplateSpec(metadata=self.metadata(site, shape), spec=pod_spec)


def web_pod_template(site: Site, config: Optional[SpawnConfig] = None) -> PodTemplateSpec:
    """Pod template for the serving deployment."""
    return PodTemplateAssembler(config).assemble(site, "web")


def job_pod_template(site: Site, *command: str, config: Optional[SpawnConfig] = None) -> PodTemplateSpec:
    """Pod template for a job running ``command`` in the site image."""
    return PodTemplateAssembler(config).assemble(site, "job", command)
