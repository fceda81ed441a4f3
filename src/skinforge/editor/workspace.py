"""Active-project holder for an editing session."""

from pathlib import Path

from ..core import get_logger
from .project import ParseError, Project

logger = get_logger(__name__)


class Workspace:
    """
    Holds the project being edited.

    Loading replaces the active project only after the new one parsed
    successfully; a failed load leaves the current project untouched.
    """

    def __init__(self, project: Project | None = None) -> None:
        self.project = project if project is not None else Project()

    def new_project(self) -> Project:
        self.project = Project()
        logger.info("project_created")
        return self.project

    def load(self, text: str | bytes) -> Project:
        """
        Replace the active project with a serialized one.

        Raises:
            ParseError: If the text is not a valid project
        """
        self.project = Project.deserialize(text)
        logger.info("project_loaded", name=self.project.name, elements=len(self.project.elements))
        return self.project

    def open(self, path: str | Path) -> Project:
        """
        Load a project file from disk and remember where it came from.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        path = Path(path)
        try:
            text = path.read_bytes()
        except OSError as e:
            raise ParseError(f"Cannot read project file {path}: {e.strerror or e}", e) from e

        project = Project.deserialize(text)
        project.set_path(str(path))
        self.project = project
        logger.info("project_opened", path=str(path), elements=len(project.elements))
        return project

    def save(self, path: str | Path | None = None) -> Path:
        """
        Write the active project to disk and clear its dirty flag.

        Args:
            path: Destination; defaults to the project's current path

        Returns:
            Path written

        Raises:
            ValueError: If no path is given and the project was never saved
            OSError: If the file cannot be written
        """
        target = path if path is not None else self.project.path
        if target is None:
            raise ValueError("Project has no path; pass one to save()")

        target = Path(target)
        self.project.set_path(str(target))
        # Clear the flag first so the written document records a clean state
        was_dirty = self.project.is_dirty
        self.project.mark_saved()
        try:
            target.write_text(self.project.serialize(), encoding="utf-8")
        except OSError:
            if was_dirty:
                self.project.mark_dirty()
            raise

        logger.info("project_saved", path=str(target))
        return target
