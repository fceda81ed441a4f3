"""Tests for the build orchestrator."""

import json
import stat
import sys

import pytest
from returns.pipeline import is_successful

from conftest import FakeRunner
from skinforge.build import (
    AsyncProcessRunner,
    BuildOrchestrator,
    BuildRequest,
    BuildState,
    ProcessOutput,
    ProcessSpawnError,
    embedder_arguments,
)
from skinforge.build.orchestrator import DEFAULT_SUCCESS_MESSAGE
from skinforge.core import Settings, create_container


def request_for(project, out_dir, **kwargs):
    return BuildRequest.for_config(project.config, out_dir / "Patcher.exe", **kwargs)


# ============================================================================
# Failures
# ============================================================================

@pytest.mark.unit
def test_missing_template_fails(orchestrator, toolchain, project, out_dir, fake_runner):
    """Test a missing template fails before anything runs."""
    toolchain.template_path.unlink()

    result = orchestrator.build_sync(request_for(project, out_dir))

    assert not is_successful(result)
    failure = result.failure()
    assert failure.kind == "template_not_found"
    assert str(toolchain.template_path) in failure.message
    assert fake_runner.calls == []
    assert orchestrator.state == BuildState.DONE
    assert not (out_dir / "Patcher.exe").exists()


@pytest.mark.unit
def test_nonzero_exit_reports_stderr(toolchain, settings, project, out_dir):
    """Test the diagnostic is the tool's stderr, verbatim."""
    runner = FakeRunner(ProcessOutput(exit_code=2, stdout="partial", stderr="bad template"))
    orchestrator = BuildOrchestrator(toolchain=toolchain, runner=runner, settings=settings)

    result = orchestrator.build_sync(request_for(project, out_dir))

    assert result.failure().kind == "process_exit"
    assert result.failure().message == "bad template"
    assert orchestrator.state == BuildState.DONE


@pytest.mark.unit
@pytest.mark.parametrize(
    "output, expected",
    [
        (ProcessOutput(exit_code=1, stdout="only stdout"), "only stdout"),
        (ProcessOutput(exit_code=7), "Embedder exited with code 7"),
    ],
)
def test_nonzero_exit_message_fallbacks(toolchain, settings, project, out_dir, output, expected):
    """Test stdout then exit code are used when stderr is empty."""
    orchestrator = BuildOrchestrator(toolchain=toolchain, runner=FakeRunner(output), settings=settings)

    result = orchestrator.build_sync(request_for(project, out_dir))

    assert result.failure().message == expected


@pytest.mark.unit
def test_spawn_error(toolchain, settings, project, out_dir):
    """Test a process that cannot start is a failure, not an exception."""
    runner = FakeRunner(error=ProcessSpawnError("Permission denied"))
    orchestrator = BuildOrchestrator(toolchain=toolchain, runner=runner, settings=settings)

    result = orchestrator.build_sync(request_for(project, out_dir))

    assert result.failure().kind == "process_spawn"
    assert result.failure().message == "Permission denied"


@pytest.mark.unit
def test_unexpected_errors_are_captured(toolchain, settings, project, out_dir):
    """Test build() never raises."""
    runner = FakeRunner(error=RuntimeError("loop exploded"))
    orchestrator = BuildOrchestrator(toolchain=toolchain, runner=runner, settings=settings)

    result = orchestrator.build_sync(request_for(project, out_dir))

    assert result.failure().kind == "internal"
    assert "loop exploded" in result.failure().message


@pytest.mark.unit
def test_output_directory_missing_in_fallback(orchestrator, toolchain, project, tmp_path):
    """Test filesystem errors surface as io_error."""
    toolchain.embedder_path.unlink()
    request = BuildRequest.for_config(project.config, tmp_path / "nowhere" / "Patcher.exe")

    result = orchestrator.build_sync(request)

    assert result.failure().kind == "io_error"


# ============================================================================
# Fallback
# ============================================================================

@pytest.mark.unit
def test_fallback_without_embedder(orchestrator, toolchain, project, out_dir, fake_runner):
    """Test a missing embedder copies the template and writes a sidecar."""
    toolchain.embedder_path.unlink()

    result = orchestrator.build_sync(request_for(project, out_dir))

    assert is_successful(result)
    artifact = result.unwrap()
    assert artifact.embedded is False
    assert fake_runner.calls == []

    output = out_dir / "Patcher.exe"
    assert output.read_bytes() == b"MZ-template-binary"

    sidecar = out_dir / "Patcher_config.json"
    assert artifact.config_path == sidecar
    assert json.loads(sidecar.read_text(encoding="utf-8"))["serverName"] == "Test Server"

    assert str(output) in artifact.message
    assert str(sidecar) in artifact.message
    assert "not embedded" in artifact.message


# ============================================================================
# Embedding
# ============================================================================

@pytest.mark.unit
def test_success_passes_config_to_embedder(orchestrator, toolchain, project, out_dir, fake_runner):
    """Test the staged config and argument order."""
    result = orchestrator.build_sync(request_for(project, out_dir))

    artifact = result.unwrap()
    assert artifact.embedded is True
    assert artifact.message == "Embedded OK"
    assert artifact.warnings == ()
    assert orchestrator.state == BuildState.DONE

    executable, args = fake_runner.calls[0]
    assert executable == str(toolchain.embedder_path)
    assert args[0::2] == ["--config", "--template", "--output"]
    assert args[3] == str(toolchain.template_path)
    assert args[5] == str(out_dir / "Patcher.exe")

    staged = json.loads(fake_runner.staged_config)
    assert staged["serverName"] == "Test Server"
    assert len(staged["elements"]) == 7
    assert staged == project.config.to_json_dict() | {"videoBackground": staged["videoBackground"]}


@pytest.mark.unit
def test_staging_directory_is_cleaned(orchestrator, settings, project, out_dir):
    """Test nothing is left behind in the staging root."""
    orchestrator.build_sync(request_for(project, out_dir))

    assert list(settings.staging_root().iterdir()) == []


@pytest.mark.unit
def test_default_success_message(toolchain, settings, project, out_dir):
    """Test silent tools get the default message."""
    runner = FakeRunner(ProcessOutput(exit_code=0))
    orchestrator = BuildOrchestrator(toolchain=toolchain, runner=runner, settings=settings)

    assert orchestrator.build_sync(request_for(project, out_dir)).unwrap().message == DEFAULT_SUCCESS_MESSAGE


@pytest.mark.unit
def test_optional_assets_only_when_present(tmp_path, project, out_dir):
    """Test background is passed when it exists and a missing icon is dropped."""
    background = tmp_path / "bg.png"
    background.write_bytes(b"png")
    request = request_for(project, out_dir, background_image_path=background, icon_path=tmp_path / "none.ico")

    args = embedder_arguments(tmp_path / "cfg.json", tmp_path / "t.exe", request)

    assert args[6:] == ["--background", str(background)]


@pytest.mark.unit
def test_icon_argument_follows_background(tmp_path, project, out_dir):
    background = tmp_path / "bg.png"
    icon = tmp_path / "app.ico"
    background.write_bytes(b"png")
    icon.write_bytes(b"ico")

    args = embedder_arguments(
        tmp_path / "cfg.json",
        tmp_path / "t.exe",
        request_for(project, out_dir, background_image_path=background, icon_path=icon),
    )

    assert args[6:] == ["--background", str(background), "--icon", str(icon)]


@pytest.mark.unit
def test_project_asset_paths_are_defaults(tmp_path, project, out_dir):
    """Test the request picks up assets stored in the project."""
    project.set_background_image(str(tmp_path / "bg.png"))
    project.config.icon_path = str(tmp_path / "app.ico")

    request = request_for(project, out_dir)

    assert request.background_image_path == tmp_path / "bg.png"
    assert request.icon_path == tmp_path / "app.ico"


# ============================================================================
# Video side-loading
# ============================================================================

@pytest.fixture
def video_project(project, tmp_path):
    video = tmp_path / "intro.mp4"
    video.write_bytes(b"frames")
    project.update_video_background(enabled=True, path=str(video))
    return project


@pytest.mark.unit
def test_video_is_referenced_and_copied(orchestrator, video_project, out_dir, fake_runner):
    """Test the embedded config names the video and the file lands in resources/."""
    artifact = orchestrator.build_sync(request_for(video_project, out_dir)).unwrap()

    staged = json.loads(fake_runner.staged_config)["videoBackground"]
    assert staged["videoFile"] == "intro.mp4"
    assert "path" not in staged

    copied = out_dir / "resources" / "intro.mp4"
    assert copied.read_bytes() == b"frames"
    assert artifact.resources == (copied,)


@pytest.mark.unit
def test_missing_video_is_ignored(orchestrator, project, out_dir, fake_runner, tmp_path):
    """Test a configured but missing video is treated as absent."""
    project.update_video_background(enabled=True, path=str(tmp_path / "gone.mp4"))

    artifact = orchestrator.build_sync(request_for(project, out_dir)).unwrap()

    staged = json.loads(fake_runner.staged_config)["videoBackground"]
    assert "videoFile" not in staged
    assert not (out_dir / "resources").exists()
    assert artifact.resources == ()


@pytest.mark.unit
def test_video_copy_failure_is_a_warning(orchestrator, video_project, out_dir):
    """Test the build still succeeds when side-loading fails."""
    (out_dir / "resources").write_text("not a directory")

    result = orchestrator.build_sync(request_for(video_project, out_dir))

    assert is_successful(result)
    artifact = result.unwrap()
    assert artifact.resources == ()
    assert len(artifact.warnings) == 1
    assert "intro.mp4" in artifact.warnings[0]


@pytest.mark.unit
def test_build_does_not_touch_project(orchestrator, video_project, out_dir):
    """Test the request is a snapshot."""
    before = video_project.config.model_dump()
    dirty = video_project.is_dirty

    orchestrator.build_sync(request_for(video_project, out_dir))

    assert video_project.config.model_dump() == before
    assert video_project.is_dirty is dirty


# ============================================================================
# Wiring
# ============================================================================

@pytest.mark.unit
def test_container_provides_orchestrator(tmp_path):
    """Test the injector wires settings, toolchain and runner."""
    settings = Settings(dev_mode=False, resources_path=tmp_path)
    container = create_container(settings)

    orchestrator = container.get(BuildOrchestrator)

    assert orchestrator.settings is settings
    assert orchestrator.toolchain.template_path == tmp_path / "AutoPatcher.exe"
    assert isinstance(orchestrator.runner, AsyncProcessRunner)
    assert container.get(BuildOrchestrator) is not orchestrator


EMBEDDER_SCRIPT = """#!{python}
import argparse, shutil, sys
p = argparse.ArgumentParser()
p.add_argument("--config")
p.add_argument("--template")
p.add_argument("--output")
p.add_argument("--background")
p.add_argument("--icon")
a = p.parse_args()
shutil.copyfile(a.template, a.output)
with open(a.output, "ab") as out, open(a.config, "rb") as cfg:
    out.write(cfg.read())
print("Embedded config into " + a.output)
"""


@pytest.mark.skipif(sys.platform == "win32", reason="shebang script")
def test_real_embedder_process(toolchain, settings, project, out_dir):
    """Test a full build against a real child process."""
    toolchain.embedder_path.write_text(EMBEDDER_SCRIPT.format(python=sys.executable))
    toolchain.embedder_path.chmod(toolchain.embedder_path.stat().st_mode | stat.S_IEXEC)
    orchestrator = BuildOrchestrator(toolchain=toolchain, settings=settings)

    artifact = orchestrator.build_sync(request_for(project, out_dir)).unwrap()

    data = (out_dir / "Patcher.exe").read_bytes()
    assert data.startswith(b"MZ-template-binary")
    assert b'"serverName": "Test Server"' in data
    assert artifact.message.startswith("Embedded config into ")
