"""Project Aggregate.

One element store plus the global launcher configuration, with a dirty flag
that is true exactly when there are edits since the last load or save.
"""

from typing import Any

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..core import get_logger
from ..core.json import JSONParseError, dumps_pretty, loads_object
from ..models.elements import unknown_fields
from ..models.project import ProjectConfig, ProjectFile
from .migrations import repair
from .store import ElementStore

logger = get_logger(__name__)

DEFAULT_PROJECT_NAME = "New Project"


class ParseError(ValueError):
    """Serialized project could not be loaded."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class Project:
    """
    Editable launcher project.

    Mutators always go through this object (or its `elements` store) so the
    dirty flag stays accurate.
    """

    def __init__(
        self,
        name: str = DEFAULT_PROJECT_NAME,
        path: str | None = None,
        config: ProjectConfig | None = None,
        is_dirty: bool = False,
    ) -> None:
        self.name = name
        self.path = path
        self.config = config if config is not None else ProjectConfig()
        self.is_dirty = is_dirty
        self.elements = ElementStore(self.config.elements, self.mark_dirty)

    def __repr__(self) -> str:
        return f"Project(name={self.name!r}, elements={len(self.elements)}, dirty={self.is_dirty})"

    # ------------------------------------------------------------------
    # Dirty tracking
    # ------------------------------------------------------------------

    def mark_dirty(self) -> None:
        self.is_dirty = True

    def mark_saved(self) -> None:
        self.is_dirty = False

    def set_path(self, path: str) -> None:
        self.path = path

    # ------------------------------------------------------------------
    # Global configuration
    # ------------------------------------------------------------------

    def update_config(self, **changes: Any) -> None:
        """
        Merge top-level configuration fields.

        Elements are owned by the store and cannot be replaced here.

        Raises:
            ValueError: If `elements` or an unknown field is passed
            pydantic.ValidationError: If a value is invalid
        """
        if "elements" in changes:
            raise ValueError("elements are edited through Project.elements")
        _assign(self.config, changes)
        self.mark_dirty()

    def set_background_image(self, path: str | None) -> None:
        self.config.background_image_path = path
        self.mark_dirty()

    def set_window_size(self, width: int, height: int) -> None:
        self.config.window_width = width
        self.config.window_height = height
        self.mark_dirty()

    def set_window_border_radius(self, radius: int) -> None:
        self.config.window_border_radius = radius
        self.mark_dirty()

    def set_ui_mode(self, mode: str) -> None:
        self.config.ui_mode = mode
        self.mark_dirty()

    def update_progress_bar(self, **changes: Any) -> None:
        _assign(self.config.progress_bar, changes)
        self.mark_dirty()

    def update_video_background(self, **changes: Any) -> None:
        _assign(self.config.video_background, changes)
        self.mark_dirty()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_document(self) -> ProjectFile:
        return ProjectFile(
            name=self.name,
            path=self.path,
            is_dirty=self.is_dirty,
            config=self.config,
        )

    def serialize(self) -> str:
        """
        Canonical indented JSON for the whole project.

        Elements appear in insertion order, not layer order.
        """
        doc = self.to_document().model_dump(mode="json", by_alias=True, exclude_none=True)
        return dumps_pretty(doc)

    @classmethod
    def deserialize(cls, text: str | bytes) -> "Project":
        """
        Parse a serialized project.

        Older documents are repaired before validation. The returned project is
        clean and has no selection.

        Args:
            text: Serialized project

        Returns:
            New project instance

        Raises:
            ParseError: If the text is malformed or does not describe a project
        """
        try:
            raw = loads_object(text)
        except JSONParseError as e:
            logger.warning("project_parse_failed", error=str(e))
            raise ParseError(f"Invalid project file: {e}", e) from e

        try:
            doc = ProjectFile.model_validate(repair(raw))
        except PydanticValidationError as e:
            logger.warning("project_validation_failed", errors=e.error_count())
            raise ParseError(f"Invalid project file: {_describe(e)}", e) from e

        return cls(name=doc.name, path=doc.path, config=doc.config, is_dirty=False)


def _assign(model: BaseModel, changes: dict[str, Any]) -> None:
    unknown = unknown_fields(model, changes)
    if unknown:
        raise ValueError(f"Unknown {type(model).__name__} field(s): {', '.join(unknown)}")
    for field, value in changes.items():
        setattr(model, field, value)


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "document"
    return f"{location}: {first['msg']}"
