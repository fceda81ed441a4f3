"""
Build Orchestrator
Turns a project configuration into a distributable launcher executable.
"""

import asyncio
import shutil
import tempfile
from pathlib import Path

from returns.result import Failure, Success

from ..core import LogContext, Settings, get_logger, get_settings
from ..core.id import new_build_id
from ..models.project import ProjectConfig
from .errors import (
    BuildError,
    OptionalAssetCopyError,
    ProcessExitError,
    ToolNotFound,
)
from .process import AsyncProcessRunner, ProcessRunner
from .staging import (
    STAGED_CONFIG_NAME,
    StagedVideo,
    copy_video_resource,
    sidecar_config_path,
    stage_video,
    write_config,
)
from .toolchain import Toolchain, resolve_toolchain
from .types import BuildArtifact, BuildFailure, BuildRequest, BuildResult, BuildState

logger = get_logger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Patcher generated successfully!"


def embedder_arguments(config_path: Path, template_path: Path, request: BuildRequest) -> list[str]:
    """
    Command line for the embedder.

    Optional assets are passed only when their file exists.
    """
    args = [
        "--config", str(config_path),
        "--template", str(template_path),
        "--output", str(request.output_path),
    ]
    if request.background_image_path and request.background_image_path.exists():
        args += ["--background", str(request.background_image_path)]
    if request.icon_path and request.icon_path.exists():
        args += ["--icon", str(request.icon_path)]
    return args


class BuildOrchestrator:
    """
    Runs one build at a time to a definite outcome.

    `build()` never raises: every failure comes back as a `Failure` value.
    Instances share no state, so separate orchestrators may build
    concurrently as long as they target different outputs.
    """

    def __init__(
        self,
        toolchain: Toolchain | None = None,
        runner: ProcessRunner | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.toolchain = toolchain or resolve_toolchain(self.settings)
        self.runner = runner or AsyncProcessRunner()
        self.state = BuildState.IDLE

    def _transition(self, state: BuildState) -> None:
        logger.debug("build_state", from_state=self.state.value, to_state=state.value)
        self.state = state

    async def build(self, request: BuildRequest) -> BuildResult:
        """
        Build the artifact described by `request`.

        Args:
            request: Configuration snapshot and output location

        Returns:
            Success(BuildArtifact) or Failure(BuildFailure)
        """
        with LogContext(build_id=new_build_id()):
            logger.info("build_started", output=str(request.output_path))
            try:
                artifact = await self._run(request)
            except BuildError as e:
                logger.error("build_failed", kind=e.kind, error=e.message)
                result: BuildResult = Failure(e.to_failure())
            except OSError as e:
                logger.error("build_io_failed", error=str(e))
                result = Failure(BuildFailure(kind="io_error", message=str(e)))
            except Exception as e:
                logger.error("build_crashed", error=str(e), exc_info=True)
                result = Failure(BuildFailure(kind="internal", message=str(e) or type(e).__name__))
            else:
                logger.info("build_succeeded", output=str(artifact.output_path), embedded=artifact.embedded)
                result = Success(artifact)
            finally:
                self._transition(BuildState.DONE)
        return result

    def build_sync(self, request: BuildRequest) -> BuildResult:
        """Blocking wrapper around `build()`."""
        return asyncio.run(self.build(request))

    async def _run(self, request: BuildRequest) -> BuildArtifact:
        self._transition(BuildState.RESOLVING)
        template = self.toolchain.require_template()

        self._transition(BuildState.STAGING)
        config, video = stage_video(request.config)

        with tempfile.TemporaryDirectory(
            prefix="skinforge_", dir=self.settings.staging_root()
        ) as staging_dir:
            config_path = write_config(config, Path(staging_dir) / STAGED_CONFIG_NAME)

            self._transition(BuildState.INVOKING)
            try:
                embedder = self.toolchain.require_embedder()
            except ToolNotFound as e:
                logger.warning("embedder_missing", path=str(e.path))
                return self._fallback(template, config, request)

            args = embedder_arguments(config_path, template, request)
            output = await self.runner.run(embedder, args)

        if output.exit_code != 0:
            raise ProcessExitError(output.exit_code, output.stdout, output.stderr)

        self._transition(BuildState.POST_PROCESSING)
        resources, warnings = self._side_load(video, request.output_path)

        return BuildArtifact(
            message=output.stdout or DEFAULT_SUCCESS_MESSAGE,
            output_path=request.output_path,
            resources=tuple(resources),
            warnings=tuple(warnings),
        )

    def _fallback(self, template: Path, config: ProjectConfig, request: BuildRequest) -> BuildArtifact:
        """Copy the template verbatim and write the configuration beside it."""
        output_path = request.output_path
        sidecar = sidecar_config_path(
            output_path, self.settings.executable_suffix, self.settings.config_suffix
        )
        shutil.copyfile(template, output_path)
        write_config(config, sidecar)

        logger.warning("fallback_build", output=str(output_path), config=str(sidecar))
        return BuildArtifact(
            message=(
                f"Patcher copied to: {output_path}\n"
                f"Configuration saved to: {sidecar}\n\n"
                "Note: the embedder was not found, so the configuration "
                "was not embedded in the executable."
            ),
            output_path=output_path,
            embedded=False,
            config_path=sidecar,
        )

    def _side_load(self, video: StagedVideo | None, output_path: Path) -> tuple[list[Path], list[str]]:
        if video is None:
            return [], []
        try:
            copied = copy_video_resource(video, output_path, self.settings.resources_dir_name)
        except OptionalAssetCopyError as e:
            # Executable is fine; only the side-loaded video is missing
            logger.error("video_copy_failed", error=e.message)
            return [], [e.message]
        return [copied], []
