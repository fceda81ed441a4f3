"""
Models package - project document and editor element schemas.
"""

from .elements import (
    BoxElement,
    BoxStyle,
    ButtonElement,
    ButtonStates,
    Effects,
    ElementType,
    ImageElement,
    LabelElement,
    PercentageElement,
    StateStyle,
    StatusElement,
    UIElement,
    WebviewElement,
    WebviewStyle,
    create_element,
    unknown_fields,
)
from .project import (
    ControlButtonConfig,
    ProgressBarConfig,
    ProjectConfig,
    ProjectFile,
    VideoBackgroundConfig,
)

__all__ = [
    # Elements
    "ElementType",
    "UIElement",
    "ButtonElement",
    "LabelElement",
    "StatusElement",
    "PercentageElement",
    "BoxElement",
    "ImageElement",
    "WebviewElement",
    "Effects",
    "StateStyle",
    "ButtonStates",
    "BoxStyle",
    "WebviewStyle",
    "create_element",
    "unknown_fields",
    # Project
    "ProjectConfig",
    "ProjectFile",
    "ProgressBarConfig",
    "VideoBackgroundConfig",
    "ControlButtonConfig",
]
