"""Project configuration models."""

from typing import Any, Literal

from pydantic import Field, model_validator

from .elements import SkinModel, UIElement
from .html_template import DEFAULT_CSS, DEFAULT_HTML, DEFAULT_JS


class ProgressBarConfig(SkinModel):
    """The single patch progress bar drawn by the launcher."""

    x: int = 50
    y: int = 550
    width: int = 700
    height: int = 20
    background_color: str = "#333333"
    fill_color: str = "#00FF00"
    border_color: str = "#666666"
    border_radius: int = 0
    background_image: str | None = None
    fill_image: str | None = None


class ControlButtonConfig(SkinModel):
    """On-screen play/pause button shown over a video background."""

    x: int = 720
    y: int = 440
    size: int = 50
    background_color: str = "#333333"
    icon_color: str = "#ffffff"
    border_color: str = "#666666"
    border_width: int = 2
    opacity: int = Field(default=100, ge=0, le=100)


class VideoBackgroundConfig(SkinModel):
    """
    Optional looping video behind the skin.

    `path` is the editor-side source file. Builds replace it with `video_file`,
    the bare file name the launcher loads from its resources directory.
    """

    enabled: bool = False
    path: str = ""
    video_file: str | None = None
    loop: bool = True
    autoplay: bool = True
    muted: bool = True
    show_controls: bool = True
    control_button: ControlButtonConfig = Field(default_factory=ControlButtonConfig)


class ProjectConfig(SkinModel):
    """Everything the launcher needs at runtime: identity, window and skin."""

    # Server / client
    server_name: str = "My Server"
    patch_list_url: str = "http://example.com/patchlist.txt"
    news_url: str = ""
    client_exe: str = "ragexe.exe"
    client_args: str = ""
    grf_files: list[str] = Field(default_factory=lambda: ["data.grf"])
    icon_path: str | None = None

    # Window
    window_width: int = Field(default=800, gt=0)
    window_height: int = Field(default=600, gt=0)
    window_border_radius: int = Field(default=0, ge=0)

    # Skin
    ui_mode: Literal["image", "html"] = "image"
    elements: list[UIElement] = Field(default_factory=list)
    progress_bar: ProgressBarConfig = Field(default_factory=ProgressBarConfig)
    background_image_path: str | None = None
    video_background: VideoBackgroundConfig = Field(default_factory=VideoBackgroundConfig)

    # HTML mode payloads, passed through untouched
    html_content: str = DEFAULT_HTML
    css_content: str = DEFAULT_CSS
    js_content: str = DEFAULT_JS

    @model_validator(mode="after")
    def check_unique_element_ids(self) -> "ProjectConfig":
        seen: set[str] = set()
        for element in self.elements:
            if element.id in seen:
                raise ValueError(f"duplicate element id {element.id!r}")
            seen.add(element.id)
        return self

    def to_json_dict(self) -> dict[str, Any]:
        """Serialized form with camelCase keys; unset optionals are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProjectFile(SkinModel):
    """On-disk project document."""

    name: str = "New Project"
    path: str | None = None
    is_dirty: bool = False
    config: ProjectConfig
