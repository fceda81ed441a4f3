"""Build request/result types."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from returns.result import Result

from ..models.project import ProjectConfig


class BuildState(str, Enum):
    """Orchestrator progress; DONE covers both success and failure."""

    IDLE = "idle"
    RESOLVING = "resolving"
    STAGING = "staging"
    INVOKING = "invoking"
    POST_PROCESSING = "post_processing"
    DONE = "done"


class BuildRequest(BaseModel):
    """
    One build invocation.

    `config` is a snapshot; the orchestrator never writes back into the
    project it came from. Background image and icon are build-time inputs and
    are not persisted.
    """

    model_config = ConfigDict(frozen=True)

    config: ProjectConfig
    output_path: Path
    background_image_path: Path | None = None
    icon_path: Path | None = None

    @classmethod
    def for_config(
        cls,
        config: ProjectConfig,
        output_path: str | Path,
        background_image_path: str | Path | None = None,
        icon_path: str | Path | None = None,
    ) -> "BuildRequest":
        """
        Snapshot a project configuration for building.

        Asset paths default to the ones stored in the configuration.
        """
        background = background_image_path or config.background_image_path
        icon = icon_path or config.icon_path
        return cls(
            config=config.model_copy(deep=True),
            output_path=Path(output_path),
            background_image_path=Path(background) if background else None,
            icon_path=Path(icon) if icon else None,
        )


@dataclass(frozen=True)
class BuildArtifact:
    """Successful build."""

    message: str
    output_path: Path
    embedded: bool = True
    config_path: Path | None = None  # Sidecar config, fallback builds only
    resources: tuple[Path, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class BuildFailure:
    """Failed build with a user-facing diagnostic."""

    kind: str
    message: str


BuildResult = Result[BuildArtifact, BuildFailure]
