"""Pytest configuration and fixtures."""

import os
from collections.abc import Sequence
from pathlib import Path

import pytest

from skinforge.build import BuildOrchestrator, ProcessOutput, Toolchain
from skinforge.core import Settings, get_settings
from skinforge.editor import Project


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["SKINFORGE_LOG_LEVEL"] = "DEBUG"
    os.environ["SKINFORGE_DEV_MODE"] = "false"


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Settings are cached per process; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Fakes
# ============================================================================

class FakeRunner:
    """ProcessRunner double that records calls and the staged config."""

    def __init__(self, output: ProcessOutput | None = None, error: Exception | None = None):
        self.output = output or ProcessOutput(exit_code=0, stdout="Embedded OK")
        self.error = error
        self.calls: list[tuple[str, list[str]]] = []
        self.staged_config: str | None = None

    async def run(self, executable, args: Sequence[str]) -> ProcessOutput:
        args = list(args)
        self.calls.append((str(executable), args))
        if "--config" in args:
            self.staged_config = Path(args[args.index("--config") + 1]).read_text(encoding="utf-8")
        if self.error is not None:
            raise self.error
        return self.output


# ============================================================================
# Build Fixtures
# ============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings with an isolated staging directory."""
    staging = tmp_path / "staging"
    staging.mkdir()
    return Settings(temp_dir=staging, resources_path=tmp_path / "bin")


@pytest.fixture
def toolchain(tmp_path):
    """Template and embedder binaries that exist on disk."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)
    template = bin_dir / "AutoPatcher.exe"
    template.write_bytes(b"MZ-template-binary")
    embedder = bin_dir / "embedder.exe"
    embedder.write_bytes(b"MZ-embedder")
    return Toolchain(template_path=template, embedder_path=embedder)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def orchestrator(toolchain, fake_runner, settings):
    return BuildOrchestrator(toolchain=toolchain, runner=fake_runner, settings=settings)


@pytest.fixture
def out_dir(tmp_path):
    out = tmp_path / "dist"
    out.mkdir()
    return out


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def project():
    """Clean project with one element of every variant."""
    project = Project(name="Test Launcher")
    for kind in ("button", "label", "box", "image", "webview", "status", "percentage"):
        project.elements.add(kind)
    project.config.server_name = "Test Server"
    project.config.patch_list_url = "http://patch.example.com/list.txt"
    project.mark_saved()
    return project
