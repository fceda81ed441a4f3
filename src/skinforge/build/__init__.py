"""Build pipeline: stage a project configuration and embed it into the launcher template."""

from .errors import (
    BuildError,
    OptionalAssetCopyError,
    ProcessExitError,
    ProcessSpawnError,
    TemplateNotFound,
    ToolNotFound,
)
from .orchestrator import BuildOrchestrator, embedder_arguments
from .process import AsyncProcessRunner, ProcessOutput, ProcessRunner, run_sync
from .toolchain import Toolchain, resolve_toolchain
from .types import BuildArtifact, BuildFailure, BuildRequest, BuildResult, BuildState

__all__ = [
    # Orchestration
    "BuildOrchestrator",
    "BuildRequest",
    "BuildResult",
    "BuildArtifact",
    "BuildFailure",
    "BuildState",
    "embedder_arguments",
    # Toolchain
    "Toolchain",
    "resolve_toolchain",
    # Process
    "ProcessRunner",
    "AsyncProcessRunner",
    "ProcessOutput",
    "run_sync",
    # Errors
    "BuildError",
    "TemplateNotFound",
    "ToolNotFound",
    "ProcessSpawnError",
    "ProcessExitError",
    "OptionalAssetCopyError",
]
