"""Load-time repair of project documents written by older editors.

Runs once on the raw decoded document before model validation. Each step
fills in a section that older files lack, so every caller downstream can
assume the current shape.
"""

from collections.abc import Callable
from typing import Any

from ..core import get_logger
from ..models.project import ControlButtonConfig, VideoBackgroundConfig

logger = get_logger(__name__)

Document = dict[str, Any]


def default_control_button() -> dict[str, Any]:
    return ControlButtonConfig().model_dump(by_alias=True)


def default_video_background() -> dict[str, Any]:
    return VideoBackgroundConfig().model_dump(by_alias=True, exclude_none=True)


def _ensure_video_background(doc: Document) -> Document:
    config = doc.get("config")
    if not isinstance(config, dict):
        return doc

    video = config.get("videoBackground")
    if video is None:
        config["videoBackground"] = default_video_background()
        logger.info("repaired_section", section="videoBackground")
    elif isinstance(video, dict):
        if video.get("controlButton") is None:
            video["controlButton"] = default_control_button()
            logger.info("repaired_section", section="videoBackground.controlButton")
        if "path" in video and video["path"] is None:
            video["path"] = ""
    return doc


REPAIRS: list[Callable[[Document], Document]] = [
    _ensure_video_background,
]


def repair(doc: Document) -> Document:
    """
    Apply every repair step to a decoded project document.

    Args:
        doc: Raw document (mutated in place)

    Returns:
        The repaired document
    """
    for step in REPAIRS:
        doc = step(doc)
    return doc
