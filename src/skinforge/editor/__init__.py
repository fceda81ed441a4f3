"""Editor model: element store, project aggregate and session workspace."""

from .project import ParseError, Project
from .store import ElementStore
from .workspace import Workspace

__all__ = [
    "ElementStore",
    "ParseError",
    "Project",
    "Workspace",
]
