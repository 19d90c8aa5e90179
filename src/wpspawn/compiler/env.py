"""Environment composition for generated containers."""

import logging
from typing import Dict, List

from wpspawn.compiler.sources import MediaBackend, git_source, resolve_media_backend
from wpspawn.compiler.stages import StagedList
from wpspawn.models.kube import (
    EnvFromSource,
    EnvVar,
    EnvVarSource,
    LocalObjectReference,
    ObjectFieldSelector,
)
from wpspawn.models.site import SECRET_COMPONENT, Site, join_path


logger = logging.getLogger(__name__)

BUCKET_SCHEMES = {
    "s3": "s3",
    "gcs": "gs",
}

# Credential names accepted on a backend and the names the runtime expects.
# Anything else is dropped.
BACKEND_ENV_VARS: Dict[str, Dict[str, str]] = {
    "s3": {
        "AWS_ACCESS_KEY_ID": "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY": "AWS_SECRET_ACCESS_KEY",
        "AWS_CONFIG_FILE": "AWS_CONFIG_FILE",
        "ENDPOINT": "S3_ENDPOINT",
    },
    "gcs": {
        "GOOGLE_CREDENTIALS": "GOOGLE_CREDENTIALS",
        "GOOGLE_APPLICATION_CREDENTIALS": "GOOGLE_APPLICATION_CREDENTIALS",
    },
}


def builtin_env(site: Site) -> List[EnvVar]:
    """The six variables every main process starts with, in fixed order."""
    return [
        EnvVar(name="WP_HOME", value=site.home_url()),
        EnvVar(name="WP_SITEURL", value=site.site_url()),
        EnvVar(name="WP_CORE_DIRECTORY", value=site.spec.wordpress_path_prefix),
        EnvVar(name="STACK_ROUTES", value=",".join(site.routes())),
        EnvVar(name="STACK_SITE_NAME", value=site.name),
        EnvVar(name="STACK_SITE_NAMESPACE", value=site.namespace),
    ]


def bucket_url(backend: MediaBackend) -> str:
    return f"{BUCKET_SCHEMES[backend.kind]}://{join_path(backend.bucket, backend.path_prefix)}"


def media_env(site: Site) -> List[EnvVar]:
    """Bucket URL and remapped credentials for the remote media backend."""
    backend = resolve_media_backend(site)
    if backend is None:
        return []

    out = [EnvVar(name="STACK_MEDIA_BUCKET", value=bucket_url(backend))]

    names = BACKEND_ENV_VARS[backend.kind]
    for env in backend.env:
        name = names.get(env.name)
        if name is None:
            logger.debug(f"Dropping unsupported {backend.kind} variable {env.name} for site {site.name}")
            continue
        out.append(env.model_copy(update={"name": name}))

    return out


def env_stages(site: Site) -> StagedList[EnvVar]:
    """Main process environment: built-ins, then user env, then media env.

    Names are not deduplicated; later entries shadow earlier ones when the
    container starts.
    """
    return (
        StagedList()
        .add("builtin", builtin_env(site))
        .add("user", site.spec.env)
        .add("media", media_env(site))
    )


def env(site: Site) -> List[EnvVar]:
    return env_stages(site).build()


def env_from_stages(site: Site) -> StagedList[EnvFromSource]:
    secret = EnvFromSource(
        secret_ref=LocalObjectReference(name=site.component_name(SECRET_COMPONENT))
    )
    return (
        StagedList()
        .add("secret", [secret])
        .add("user", site.spec.env_from)
    )


def env_from(site: Site) -> List[EnvFromSource]:
    return env_from_stages(site).build()


def git_clone_env(site: Site) -> List[EnvVar]:
    """Environment of the code fetch step."""
    git = git_source(site)
    if git is None:
        return []

    out = [
        EnvVar(name="GIT_CLONE_URL", value=git.repository),
        EnvVar(name="SRC_DIR", value=site.spec.code.src_mount_path),
    ]
    if git.reference:
        out.append(EnvVar(name="GIT_CLONE_REF", value=git.reference))

    out.extend(git.env)
    return out


def pod_identity_env() -> List[EnvVar]:
    """POD_NAMESPACE and POD_NAME from the downward API."""
    return [
        EnvVar(
            name="POD_NAMESPACE",
            value_from=EnvVarSource(field_ref=ObjectFieldSelector(field_path="metadata.namespace")),
        ),
        EnvVar(
            name="POD_NAME",
            value_from=EnvVarSource(field_ref=ObjectFieldSelector(field_path="metadata.name")),
        ),
    ]
