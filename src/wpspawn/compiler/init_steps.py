"""Init step sequencing.

Init steps always run in this order:

1. ``prepare-volumes``: fix ownership of writable code/media mounts and link
   the log directory, so every later step can write to the shared volumes;
2. the site's own init containers, verbatim;
3. ``git``: fetch the code when the code source is a git repository;
4. ``install-wp``: bootstrap WordPress, which needs the fetched code.
"""

import logging
from typing import List, Optional

from wpspawn.compiler import env as envs
from wpspawn.compiler.sources import git_source, has_code_mounts, has_media_mounts
from wpspawn.compiler.stages import StagedList
from wpspawn.compiler.volumes import (
    CODE_VOLUME_NAME,
    KNATIVE_INTERNAL_MOUNT_PATH,
    KNATIVE_INTERNAL_VOLUME,
    KNATIVE_VAR_LOG_MOUNT_PATH,
    KNATIVE_VAR_LOG_VOLUME,
    MEDIA_VOLUME_NAME,
    volume_mounts,
)
from wpspawn.models.config import SpawnConfig
from wpspawn.models.kube import Container, SecurityContext, VolumeMount
from wpspawn.models.site import Site
from wpspawn.utils.templates import render_template


logger = logging.getLogger(__name__)

WWW_DATA_USER_ID = 33

PREPARE_VOLUMES_CONTAINER = "prepare-volumes"
GIT_CONTAINER = "git"
INSTALL_CONTAINER = "install-wp"
INSTALL_COMMAND = "wp-install"

PREPARE_CODE_MOUNT_PATH = "/mnt/code"
PREPARE_MEDIA_MOUNT_PATH = "/mnt/media"

GIT_CLONE_SCRIPT = """#!/bin/bash
set -e
set -o pipefail

export HOME="$(mktemp -d)"
export GIT_SSH_COMMAND="ssh -o UserKnownHostsFile=$HOME/.ssh/knonw_hosts -o StrictHostKeyChecking=no"

test -d "$HOME/.ssh" || mkdir "$HOME/.ssh"

if [ ! -z "$SSH_RSA_PRIVATE_KEY" ] ; then
    echo "$SSH_RSA_PRIVATE_KEY" > "$HOME/.ssh/id_rsa"
    chmod 0400 "$HOME/.ssh/id_rsa"
    export GIT_SSH_COMMAND="$GIT_SSH_COMMAND -o IdentityFile=$HOME/.ssh/id_rsa"
fi

if [ -z "$GIT_CLONE_URL" ] ; then
    echo "No \\$GIT_CLONE_URL specified" >&2
    exit 1
fi

find "$SRC_DIR" -maxdepth 1 -mindepth 1 -print0 | xargs -0 /bin/rm -rf

set -x
git clone "$GIT_CLONE_URL" "$SRC_DIR"
cd "$SRC_DIR"
if [ -n "$GIT_CLONE_REF" ] ; then
    git checkout -B "$GIT_CLONE_REF" "origin/$GIT_CLONE_REF"
fi
"""

PREPARE_VOLUMES_SCRIPT_TEMPLATE = """#!/bin/sh
test -d {{ code_dir }} && chown {{ uid }}:{{ uid }} {{ code_dir }}
test -d {{ media_dir }} && chown {{ uid }}:{{ uid }} {{ media_dir }}
test -d {{ var_log_dir }} && chown {{ uid }}:{{ uid }} {{ var_log_dir }}
ln -sf ../log {{ internal_dir }}/${POD_NAMESPACE}_${POD_NAME}_wordpress
"""

INSTALL_ARGS_ENV = (
    "WORDPRESS_BOOTSTRAP_TITLE",
    "WORDPRESS_BOOTSTRAP_USER",
    "WORDPRESS_BOOTSTRAP_PASSWORD",
    "WORDPRESS_BOOTSTRAP_EMAIL",
)


def security_context() -> SecurityContext:
    """Security context shared by the site's own processes."""
    return SecurityContext(run_as_user=WWW_DATA_USER_ID, proc_mount="Default")


def prepare_volumes_script() -> str:
    return render_template(
        PREPARE_VOLUMES_SCRIPT_TEMPLATE,
        uid=WWW_DATA_USER_ID,
        code_dir=PREPARE_CODE_MOUNT_PATH,
        media_dir=PREPARE_MEDIA_MOUNT_PATH,
        var_log_dir=KNATIVE_VAR_LOG_MOUNT_PATH,
        internal_dir=KNATIVE_INTERNAL_MOUNT_PATH,
    )


def prepare_volumes_container(site: Site, config: SpawnConfig) -> Container:
    """Fix ownership of writable mounts before anything writes to them."""
    mounts = [
        VolumeMount(name=KNATIVE_INTERNAL_VOLUME, mount_path=KNATIVE_INTERNAL_MOUNT_PATH),
        VolumeMount(name=KNATIVE_VAR_LOG_VOLUME, mount_path=KNATIVE_VAR_LOG_MOUNT_PATH),
    ]

    # Read-only volumes cannot be chowned, so they are left out.
    if has_code_mounts(site) and not site.spec.code.read_only:
        mounts.append(VolumeMount(
            name=CODE_VOLUME_NAME,
            mount_path=PREPARE_CODE_MOUNT_PATH,
            sub_path=site.spec.code.content_sub_path or None,
        ))

    if has_media_mounts(site) and not site.spec.media.read_only:
        mounts.append(VolumeMount(
            name=MEDIA_VOLUME_NAME,
            mount_path=PREPARE_MEDIA_MOUNT_PATH,
            sub_path=site.spec.media.content_sub_path or None,
        ))

    return Container(
        name=PREPARE_VOLUMES_CONTAINER,
        image=config.images.prepare_volumes,
        args=["/bin/sh", "-c", prepare_volumes_script()],
        env=envs.pod_identity_env(),
        volume_mounts=mounts,
    )


def git_clone_container(site: Site, config: SpawnConfig) -> Optional[Container]:
    git = git_source(site)
    if git is None:
        return None

    return Container(
        name=GIT_CONTAINER,
        image=config.images.git_clone,
        args=["/bin/bash", "-c", GIT_CLONE_SCRIPT],
        env=envs.git_clone_env(site),
        env_from=envs.env_from(site) + list(git.env_from),
        volume_mounts=[
            VolumeMount(name=CODE_VOLUME_NAME, mount_path=site.spec.code.src_mount_path),
        ],
        security_context=security_context(),
    )


def install_container(site: Site) -> Optional[Container]:
    """One-shot WordPress install using the main process environment."""
    bootstrap = site.spec.bootstrap
    if bootstrap is None:
        return None

    title, user, password, email = (f"$({name})" for name in INSTALL_ARGS_ENV)
    return Container(
        name=INSTALL_CONTAINER,
        image=site.spec.image,
        command=[INSTALL_COMMAND],
        args=[title, site.home_url(), user, password, email],
        env=envs.env(site) + list(bootstrap.env),
        env_from=envs.env_from(site) + list(bootstrap.env_from),
        volume_mounts=volume_mounts(site),
        security_context=security_context(),
    )


def init_step_stages(site: Site, config: Optional[SpawnConfig] = None) -> StagedList[Container]:
    """Init containers as named stages, in execution order."""
    config = config or SpawnConfig()

    prepare = []
    if has_code_mounts(site) or has_media_mounts(site):
        prepare.append(prepare_volumes_container(site, config))

    git = git_clone_container(site, config)
    install = install_container(site)

    stages = (
        StagedList()
        .add(PREPARE_VOLUMES_CONTAINER, prepare)
        .add("user", site.spec.init_containers)
        .add(GIT_CONTAINER, [git] if git is not None else [])
        .add(INSTALL_CONTAINER, [install] if install is not None else [])
    )
    logger.debug(f"Init stages for site {site.name}: {stages.active_names()}")
    return stages


def init_containers(site: Site, config: Optional[SpawnConfig] = None) -> List[Container]:
    return init_step_stages(site, config).build()
