"""Loading of site definitions and compiler configuration from YAML."""

import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from wpspawn.models.config import SpawnConfig
from wpspawn.models.kube import PodTemplateSpec
from wpspawn.models.site import Site


logger = logging.getLogger(__name__)


class SiteLoadError(Exception):
    """A site or configuration file could not be loaded."""


class SiteLoader:
    """Loads sites and configuration from YAML files."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize the loader."""
        self.config_path = Path(config_path) if config_path else None
        self.yaml = YAML(typ="safe")

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML mapping."""
        if not file_path.exists():
            raise SiteLoadError(f"File not found: {file_path}")

        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {file_path}: {e}")
            raise SiteLoadError(f"Cannot read {file_path}: {e}") from e

        try:
            data = self.yaml.load(text)
        except YAMLError as e:
            logger.error(f"Invalid YAML in {file_path}: {e}")
            raise SiteLoadError(f"Invalid YAML in {file_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SiteLoadError(f"Expected a mapping in {file_path}")
        return data

    def load_config(self) -> SpawnConfig:
        """Load compiler configuration, or the defaults without a file."""
        if self.config_path is None:
            return SpawnConfig()

        data = self._read_yaml(self.config_path)
        try:
            config = SpawnConfig(**data)
        except ValidationError as e:
            logger.error(f"Invalid config {self.config_path}: {e}")
            raise SiteLoadError(f"Invalid config {self.config_path}: {e}") from e

        logger.debug(f"Loaded config: {self.config_path}")
        return config

    def load_site(self, site_path: Union[str, Path]) -> Site:
        """Load a site resource (``metadata`` and ``spec``)."""
        site_path = Path(site_path)
        data = self._read_yaml(site_path)

        # Accept the full resource as well as its metadata/spec only
        data = {key: data[key] for key in ("metadata", "spec") if key in data}
        try:
            site = Site.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid site {site_path}: {e}")
            raise SiteLoadError(f"Invalid site {site_path}: {e}") from e

        logger.info(f"Loaded site {site.namespace}/{site.name} from {site_path}")
        return site


def dump_manifest(template: PodTemplateSpec) -> str:
    """Render a pod template as YAML."""
    yaml = YAML()
    yaml.default_flow_style = False
    stream = io.StringIO()
    yaml.dump(template.to_manifest(), stream)
    return stream.getvalue()
