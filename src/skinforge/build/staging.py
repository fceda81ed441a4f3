"""Staging of configuration and media for the embedder."""

import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core import get_logger
from ..core.json import dumps_pretty
from ..models.project import ProjectConfig
from .errors import OptionalAssetCopyError

logger = get_logger(__name__)

STAGED_CONFIG_NAME = "autopatch_config.json"


@dataclass(frozen=True)
class StagedVideo:
    """Video asset to side-load next to the artifact after a successful build."""

    source: Path
    file_name: str


def stage_video(config: ProjectConfig) -> tuple[ProjectConfig, StagedVideo | None]:
    """
    Rewrite the video background for embedding.

    The returned copy has its editor-side source path cleared. When the
    video is enabled and its file exists, `video_file` is set to the bare file
    name and the source is returned for copying. A missing file is treated as
    no video.

    Args:
        config: Configuration snapshot (not modified)

    Returns:
        (config to embed, staged video or None)
    """
    staged = config.model_copy(deep=True)
    video = staged.video_background
    source_path = video.path
    video.path = ""
    video.video_file = None

    if not (video.enabled and source_path):
        return staged, None

    source = Path(source_path)
    if not source.is_file():
        logger.warning("video_not_found", path=source_path)
        return staged, None

    video.video_file = source.name
    logger.info("video_staged", source=str(source), file=source.name)
    return staged, StagedVideo(source=source, file_name=source.name)


def embedded_document(config: ProjectConfig) -> dict[str, Any]:
    """Configuration as the launcher reads it, without the editor-side video path."""
    doc = config.to_json_dict()
    doc["videoBackground"].pop("path", None)
    return doc


def write_config(config: ProjectConfig, path: Path) -> Path:
    path.write_text(dumps_pretty(embedded_document(config)), encoding="utf-8")
    logger.debug("config_written", path=str(path))
    return path


def sidecar_config_path(output_path: Path, executable_suffix: str, config_suffix: str) -> Path:
    """
    Fallback config location: the artifact name with its executable suffix
    replaced (`Patcher.exe` -> `Patcher_config.json`). Names without that
    suffix get the config suffix appended.
    """
    pattern = re.compile(re.escape(executable_suffix) + "$", re.IGNORECASE)
    name, count = pattern.subn(config_suffix, output_path.name)
    if count == 0:
        name = output_path.name + config_suffix
    return output_path.with_name(name)


def copy_video_resource(video: StagedVideo, output_path: Path, resources_dir_name: str) -> Path:
    """
    Copy the staged video into the resources directory beside the artifact.

    Raises:
        OptionalAssetCopyError: If the directory or copy fails
    """
    resources_dir = output_path.parent / resources_dir_name
    destination = resources_dir / video.file_name
    try:
        resources_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(video.source, destination)
    except OSError as e:
        raise OptionalAssetCopyError(video.source, destination, e.strerror or str(e)) from e

    logger.info("video_copied", destination=str(destination))
    return destination
