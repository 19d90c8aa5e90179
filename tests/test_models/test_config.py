"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from wpspawn.models.config import (
    DEFAULT_GIT_CLONE_IMAGE,
    DEFAULT_PREPARE_VOLUMES_IMAGE,
    ImageConfig,
    SpawnConfig,
)


class TestSpawnConfig:
    """Test SpawnConfig model."""

    def test_default_values(self):
        """Test default configuration values."""
        config = SpawnConfig()

        assert config.log_level == "INFO"
        assert config.images.git_clone == DEFAULT_GIT_CLONE_IMAGE
        assert config.images.prepare_volumes == DEFAULT_PREPARE_VOLUMES_IMAGE

    def test_custom_images(self):
        """Test custom images."""
        config = SpawnConfig(images=ImageConfig(git_clone="alpine/git:2.40"))

        assert config.images.git_clone == "alpine/git:2.40"
        assert config.images.prepare_volumes == DEFAULT_PREPARE_VOLUMES_IMAGE

    def test_log_level_validation(self):
        """Test log level validation."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            config = SpawnConfig(log_level=level)
            assert config.log_level == level.upper()

        # Case insensitive
        config = SpawnConfig(log_level="debug")
        assert config.log_level == "DEBUG"

        with pytest.raises(ValidationError) as exc_info:
            SpawnConfig(log_level="INVALID")

        assert "log_level" in str(exc_info.value)

    def test_extra_fields_ignored(self):
        """Test that extra fields are ignored."""
        config = SpawnConfig(extra_field="ignored")

        assert not hasattr(config, "extra_field")
