"""Build error taxonomy.

Raised inside the pipeline and converted to `BuildFailure` values at the
orchestrator boundary. `ToolNotFound` and `OptionalAssetCopyError` never fail
a build: the first selects the fallback path, the second becomes a warning.
"""

from pathlib import Path

from .types import BuildFailure


class BuildError(Exception):
    """Base class for build pipeline errors."""

    kind = "build_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_failure(self) -> BuildFailure:
        return BuildFailure(kind=self.kind, message=self.message)


class TemplateNotFound(BuildError):
    kind = "template_not_found"

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Template executable not found at: {path}\n\n"
            "Make sure the native launcher project has been built."
        )
        self.path = path


class ToolNotFound(BuildError):
    kind = "tool_not_found"

    def __init__(self, path: Path) -> None:
        super().__init__(f"Embedder not found at: {path}")
        self.path = path


class ProcessSpawnError(BuildError):
    """The child process could not be started at all."""

    kind = "process_spawn"


class ProcessExitError(BuildError):
    """The child process ran and exited non-zero."""

    kind = "process_exit"

    def __init__(self, exit_code: int, stdout: str = "", stderr: str = "") -> None:
        super().__init__(stderr or stdout or f"Embedder exited with code {exit_code}")
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


class OptionalAssetCopyError(BuildError):
    kind = "asset_copy"

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        super().__init__(f"Could not copy {source} to {destination}: {reason}")
        self.source = source
        self.destination = destination
