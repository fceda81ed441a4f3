"""Editor element models.

One pydantic model per widget variant, discriminated on the `type` tag. Field
names are snake_case in Python and camelCase in the serialized document (the
launcher runtime reads the camelCase keys).
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ElementType(str, Enum):
    """Widget variants that can be placed on the canvas."""

    BUTTON = "button"
    LABEL = "label"
    BOX = "box"
    IMAGE = "image"
    WEBVIEW = "webview"
    STATUS = "status"
    PERCENTAGE = "percentage"


class SkinModel(BaseModel):
    """Base for everything stored in a project document."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="allow",  # Keep keys written by newer editors
    )


# ============================================================================
# Shared styling
# ============================================================================


class ShadowEffect(SkinModel):
    enabled: bool = False
    color: str = "#000000"
    blur: int = 4
    offset_x: int = 2
    offset_y: int = 2


class GlowEffect(SkinModel):
    enabled: bool = False
    color: str = "#0078d4"
    intensity: int = 50


class Effects(SkinModel):
    """Visual effects applied on top of any element."""

    opacity: int = Field(default=100, ge=0, le=100)
    border_radius: int = 0
    rotation: int = 0
    shadow: ShadowEffect = Field(default_factory=ShadowEffect)
    glow: GlowEffect = Field(default_factory=GlowEffect)


class StateStyle(SkinModel):
    """Appearance of a button in one interaction state."""

    image_path: str = ""
    background_color: str = ""
    font_color: str = ""
    offset_y: int = 0  # Text shift while pressed
    opacity: int = Field(default=100, ge=0, le=100)


class ButtonStates(SkinModel):
    normal: StateStyle = Field(default_factory=StateStyle)
    hover: StateStyle = Field(default_factory=StateStyle)
    pressed: StateStyle = Field(default_factory=StateStyle)
    disabled: StateStyle = Field(default_factory=StateStyle)


class BoxStyle(SkinModel):
    fill_color: str = "#000000"
    fill_opacity: int = Field(default=50, ge=0, le=100)
    border_color: str = "#ffffff"
    border_width: int = 1
    border_radius: int = 8


class WebviewStyle(SkinModel):
    url: str = "https://example.com"
    border_radius: int = 8
    border_color: str = "#333333"
    border_width: int = 1
    background_color: str = "#1e1e1e"


# ============================================================================
# Element variants
# ============================================================================


class ElementBase(SkinModel):
    """Geometry, stacking and editor flags shared by all variants."""

    id: str
    name: str = ""
    x: int = 0
    y: int = 0
    width: int = 100
    height: int = 30
    z_index: int = 0
    visible: bool = True
    locked: bool = False
    effects: Effects = Field(default_factory=Effects)


class TextElement(ElementBase):
    text: str = ""
    font_name: str = "Segoe UI"
    font_size: int = 12
    font_color: str = "#ffffff"
    font_bold: bool = False
    font_italic: bool = False
    text_align: Literal["left", "center", "right"] = "left"
    text_vertical_align: Literal["top", "middle", "bottom"] = "middle"


class ButtonElement(TextElement):
    type: Literal["button"] = "button"
    text: str = "Button"
    action: str = "start_game"
    tooltip: str = ""
    font_size: int = 14
    font_bold: bool = True
    text_align: Literal["left", "center", "right"] = "center"
    background_color: str = "#0078d4"
    border_color: str = "#005a9e"
    border_width: int = 1
    states: ButtonStates = Field(default_factory=ButtonStates)


class LabelElement(TextElement):
    type: Literal["label"] = "label"


class StatusElement(TextElement):
    """Label the launcher rewrites with the current patch status."""

    type: Literal["status"] = "status"


class PercentageElement(TextElement):
    """Label the launcher rewrites with the patch progress percentage."""

    type: Literal["percentage"] = "percentage"


class BoxElement(ElementBase):
    type: Literal["box"] = "box"
    box_style: BoxStyle = Field(default_factory=BoxStyle)


class ImageElement(ElementBase):
    type: Literal["image"] = "image"
    background_image: str = ""


class WebviewElement(ElementBase):
    type: Literal["webview"] = "webview"
    webview_config: WebviewStyle = Field(default_factory=WebviewStyle)


UIElement = Annotated[
    Union[
        ButtonElement,
        LabelElement,
        StatusElement,
        PercentageElement,
        BoxElement,
        ImageElement,
        WebviewElement,
    ],
    Field(discriminator="type"),
]


# ============================================================================
# Default templates
# ============================================================================


def _button(element_id: str) -> ButtonElement:
    return ButtonElement(
        id=element_id,
        name="Button",
        x=100,
        y=100,
        width=120,
        height=40,
        z_index=10,
        states=ButtonStates(
            normal=StateStyle(background_color="#0078d4", font_color="#ffffff"),
            hover=StateStyle(background_color="#1e90ff", font_color="#ffffff"),
            pressed=StateStyle(background_color="#004578", font_color="#cccccc", offset_y=2),
            disabled=StateStyle(background_color="#666666", font_color="#999999", opacity=60),
        ),
        effects=Effects(border_radius=4),
    )


def _label(element_id: str) -> LabelElement:
    return LabelElement(
        id=element_id, name="Label", x=100, y=100, width=200, height=24, z_index=5, text="Label"
    )


def _status(element_id: str) -> StatusElement:
    return StatusElement(
        id=element_id,
        name="Status",
        x=50,
        y=520,
        width=400,
        height=24,
        z_index=20,
        text="Checking for updates...",
        font_color="#00ff80",
        effects=Effects(shadow=ShadowEffect(enabled=True, blur=2, offset_x=1, offset_y=1)),
    )


def _percentage(element_id: str) -> PercentageElement:
    return PercentageElement(
        id=element_id,
        name="Percentage",
        x=720,
        y=550,
        width=60,
        height=24,
        z_index=20,
        text="100%",
        font_color="#ffcc00",
        font_bold=True,
        text_align="right",
    )


def _box(element_id: str) -> BoxElement:
    return BoxElement(
        id=element_id,
        name="Box",
        x=100,
        y=100,
        width=200,
        height=150,
        z_index=1,
        effects=Effects(shadow=ShadowEffect(blur=10, offset_x=0, offset_y=4)),
    )


def _image(element_id: str) -> ImageElement:
    return ImageElement(id=element_id, name="Image", x=100, y=100, width=100, height=100, z_index=2)


def _webview(element_id: str) -> WebviewElement:
    return WebviewElement(
        id=element_id,
        name="WebView",
        x=50,
        y=50,
        width=300,
        height=200,
        z_index=3,
        effects=Effects(border_radius=8),
    )


TEMPLATES: dict[ElementType, Callable[[str], UIElement]] = {
    ElementType.BUTTON: _button,
    ElementType.LABEL: _label,
    ElementType.STATUS: _status,
    ElementType.PERCENTAGE: _percentage,
    ElementType.BOX: _box,
    ElementType.IMAGE: _image,
    ElementType.WEBVIEW: _webview,
}


def create_element(element_type: ElementType | str, element_id: str) -> UIElement:
    """
    Build a new element of the given variant from its default template.

    Each variant has its own starting position and layer. Unknown variants
    fall back to a plain label.

    Args:
        element_type: Variant tag
        element_id: Identity to assign

    Returns:
        New element
    """
    try:
        kind = ElementType(element_type)
    except ValueError:
        kind = ElementType.LABEL
    return TEMPLATES[kind](element_id)


def unknown_fields(model: BaseModel, changes: Mapping[str, Any], prefix: str = "") -> list[str]:
    """
    Names in a partial update that are not fields of `model`.

    Nested mappings are checked against the nested model they merge into.
    Field names are the Python (snake_case) names.
    """
    fields = type(model).model_fields
    unknown = []
    for key, value in changes.items():
        if key not in fields:
            unknown.append(prefix + key)
            continue
        current = getattr(model, key)
        if isinstance(value, Mapping) and isinstance(current, BaseModel):
            unknown.extend(unknown_fields(current, value, f"{prefix}{key}."))
    return unknown
