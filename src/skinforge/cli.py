from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .build import BuildOrchestrator, BuildRequest
from .core import configure_logging, create_container, get_settings
from .editor import ParseError, Project, Workspace

EXIT_OK = 0
EXIT_BUILD_FAILED = 1
EXIT_BAD_PROJECT = 2


def _open(path: str) -> Project | None:
    try:
        return Workspace().open(path)
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return None


def _cmd_new(args: argparse.Namespace) -> int:
    workspace = Workspace()
    workspace.project.name = args.name
    target = workspace.save(args.output)
    print(f"Created {target}")
    return EXIT_OK


def _cmd_layers(args: argparse.Namespace) -> int:
    project = _open(args.file)
    if project is None:
        return EXIT_BAD_PROJECT
    for element in project.elements.sorted_by_layer():
        flags = "".join(("H" if not element.visible else "-", "L" if element.locked else "-"))
        print(f"{element.z_index:>5}  {flags}  {element.type:<10} {element.name or element.id}")
    return EXIT_OK


def _cmd_build(args: argparse.Namespace) -> int:
    project = _open(args.file)
    if project is None:
        return EXIT_BAD_PROJECT

    request = BuildRequest.for_config(
        project.config,
        args.output,
        background_image_path=args.background,
        icon_path=args.icon,
    )
    orchestrator = create_container().get(BuildOrchestrator)
    result = orchestrator.build_sync(request)

    artifact = result.value_or(None)
    if artifact is None:
        print(f"error: {result.failure().message}", file=sys.stderr)
        return EXIT_BUILD_FAILED

    print(artifact.message)
    for warning in artifact.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="skinforge",
        description="Compose launcher skins and build patcher executables.",
    )
    sp = p.add_subparsers(dest="command", required=True)

    new_p = sp.add_parser("new", help="Write an empty project file")
    new_p.add_argument("name")
    new_p.add_argument("-o", "--output", required=True, type=Path, help="Project file to create")
    new_p.set_defaults(func=_cmd_new)

    layers_p = sp.add_parser("layers", help="List elements, topmost first")
    layers_p.add_argument("file")
    layers_p.set_defaults(func=_cmd_layers)

    build_p = sp.add_parser("build", help="Build a patcher executable from a project")
    build_p.add_argument("file")
    build_p.add_argument("-o", "--output", required=True, type=Path, help="Executable to write")
    build_p.add_argument("--background", type=Path, help="Background image (overrides project)")
    build_p.add_argument("--icon", type=Path, help="Icon file (overrides project)")
    build_p.set_defaults(func=_cmd_build)

    return p


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level, settings.json_logs)

    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
