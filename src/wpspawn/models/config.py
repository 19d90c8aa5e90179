"""Configuration models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_GIT_CLONE_IMAGE = "docker.io/library/buildpack-deps:stretch-scm"
DEFAULT_PREPARE_VOLUMES_IMAGE = (
    "gcr.io/google-containers/busybox"
    "@sha256:545e6a6310a27636260920bc07b994a299b6708a1b26910cfefd335fdfb60d2b"
)


class ImageConfig(BaseModel):
    """Images used by generated init steps."""
    git_clone: str = Field(default=DEFAULT_GIT_CLONE_IMAGE)
    prepare_volumes: str = Field(default=DEFAULT_PREPARE_VOLUMES_IMAGE)


class SpawnConfig(BaseModel):
    """Main configuration model."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    log_level: str = Field(default="INFO")
    images: ImageConfig = Field(default_factory=ImageConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()
