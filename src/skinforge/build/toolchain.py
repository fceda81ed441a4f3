"""Locate the template executable and the embedding tool."""

from dataclasses import dataclass
from pathlib import Path

from ..core import Settings, get_logger
from .errors import TemplateNotFound, ToolNotFound

logger = get_logger(__name__)


@dataclass(frozen=True)
class Toolchain:
    """Expected locations of the two native binaries."""

    template_path: Path
    embedder_path: Path

    def require_template(self) -> Path:
        """
        Raises:
            TemplateNotFound: If the template is missing (fatal)
        """
        if not self.template_path.is_file():
            raise TemplateNotFound(self.template_path)
        return self.template_path

    def require_embedder(self) -> Path:
        """
        Raises:
            ToolNotFound: If the embedder is missing (selects the fallback build)
        """
        if not self.embedder_path.exists():
            raise ToolNotFound(self.embedder_path)
        return self.embedder_path


def resolve_toolchain(settings: Settings) -> Toolchain:
    """
    Compute binary locations for the current deployment.

    Development builds read from the native build trees under `dev_root`;
    packaged builds read from the bundled resources directory.
    """
    if settings.dev_mode:
        root = settings.dev_root
        toolchain = Toolchain(
            template_path=root / settings.dev_template_subpath / settings.template_name,
            embedder_path=root / settings.dev_embedder_subpath / settings.embedder_name,
        )
    else:
        toolchain = Toolchain(
            template_path=settings.resources_path / settings.template_name,
            embedder_path=settings.resources_path / settings.embedder_name,
        )

    logger.debug(
        "toolchain_resolved",
        dev_mode=settings.dev_mode,
        template=str(toolchain.template_path),
        embedder=str(toolchain.embedder_path),
    )
    return toolchain
