"""Workload shapes: what differs between the serving pod and a job pod."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from wpspawn.compiler import env as envs
from wpspawn.compiler.init_steps import WWW_DATA_USER_ID, security_context
from wpspawn.compiler.probes import (
    INTERNAL_HTTP_PORT,
    METRICS_EXPORTER_PORT,
    liveness_probe,
    readiness_probe,
)
from wpspawn.compiler.volumes import volume_mounts
from wpspawn.models.kube import (
    Container,
    ContainerPort,
    ExecAction,
    Lifecycle,
    LifecycleHandler,
    PodSecurityContext,
)
from wpspawn.models.site import Site


RESTART_POLICY_NEVER = "Never"

HOOK_SCRIPT = (
    'if test -n "${dir}" && command -v run-parts >/dev/null 2>&1 && test -d "${dir}"  ; '
    'then run-parts --exit-on-error -v "${dir}" ; fi'
)


def hook_handler(scripts_env: str) -> LifecycleHandler:
    """Run every script in the directory named by ``scripts_env``, if any."""
    script = HOOK_SCRIPT.replace("{dir}", scripts_env)
    return LifecycleHandler(exec=ExecAction(command=["/bin/sh", "-c", script]))


def main_container_fields(site: Site) -> Dict[str, Any]:
    """Fields shared by the main container of every shape."""
    return dict(
        image=site.spec.image,
        image_pull_policy=site.spec.image_pull_policy,
        volume_mounts=volume_mounts(site),
        env=envs.env(site),
        env_from=envs.env_from(site),
        security_context=security_context(),
    )


class WorkloadShape(ABC):
    """Describes one output shape of the pod template assembler."""

    name: str
    component: str
    restart_policy: Optional[str] = None

    @abstractmethod
    def main_container(self, site: Site, command: Sequence[str] = ()) -> Container:
        """Build the main container of the pod."""
        pass

    def pod_security_context(self) -> Optional[PodSecurityContext]:
        """Pod level security context, if the shape needs one."""
        return None


class WebShape(WorkloadShape):
    """Long running pod serving the site."""

    name = "web"
    component = "web"
    container_name = "wordpress"

    def main_container(self, site: Site, command: Sequence[str] = ()) -> Container:
        return Container(
            name=self.container_name,
            resources=site.spec.resources,
            ports=[
                ContainerPort(name="http", container_port=INTERNAL_HTTP_PORT),
                ContainerPort(name="prometheus", container_port=METRICS_EXPORTER_PORT),
            ],
            lifecycle=Lifecycle(
                post_start=hook_handler("POST_START_SCRIPTS"),
                pre_stop=hook_handler("PRE_STOP_SCRIPTS"),
            ),
            readiness_probe=readiness_probe(site),
            liveness_probe=liveness_probe(site),
            **main_container_fields(site),
        )


class JobShape(WorkloadShape):
    """Pod running a single wp-cli command to completion."""

    name = "job"
    component = "wp-cli"
    container_name = "wp-cli"
    restart_policy = RESTART_POLICY_NEVER

    def main_container(self, site: Site, command: Sequence[str] = ()) -> Container:
        return Container(
            name=self.container_name,
            args=list(command),
            **main_container_fields(site),
        )

    def pod_security_context(self) -> Optional[PodSecurityContext]:
        # fsGroup makes the shared volumes writable for the command
        return PodSecurityContext(fs_group=WWW_DATA_USER_ID)
