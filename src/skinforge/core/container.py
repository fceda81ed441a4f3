"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from ..build.orchestrator import BuildOrchestrator
from ..build.process import AsyncProcessRunner, ProcessRunner
from ..build.toolchain import Toolchain, resolve_toolchain


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return self.settings if self.settings is not None else get_settings()

    @singleton
    @provider
    def provide_toolchain(self, settings: Settings) -> Toolchain:
        """Provide native binary locations for this deployment."""
        return resolve_toolchain(settings)

    @provider
    def provide_process_runner(self) -> ProcessRunner:
        """Provide the subprocess-backed runner."""
        return AsyncProcessRunner()

    @provider
    def provide_orchestrator(
        self, settings: Settings, toolchain: Toolchain, runner: ProcessRunner
    ) -> BuildOrchestrator:
        """Provide a fresh orchestrator per build."""
        return BuildOrchestrator(toolchain=toolchain, runner=runner, settings=settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
