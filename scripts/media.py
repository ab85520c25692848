#!/usr/bin/env python3
"""media — inspect the resolved media of DForms classes.

Usage:
    media show <module:Class> [--kind KIND ...]

Subcommands:
    show      Import the class, merge its media with its ancestors' and print
              the result as JSON on stdout.

Exit codes:
    0  — success
    1  — import failure, not a media-defining class, or invalid media
    2  — invalid usage
"""
import argparse
import importlib
import json
import sys
from pathlib import Path

# Ensure project root is on sys.path so app/*, dforms/* and resolvers/* are
# importable when the script is invoked from any working directory.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.models.media_manifest import MediaKind, MediaReport  # noqa: E402
from dforms.media.defining_class import MediaDefiningClass  # noqa: E402
from dforms.media.errors import MediaError  # noqa: E402

_USAGE = """\
Usage:
  media show <module:Class> [--kind KIND ...]
"""


def _load_class(path: str) -> type:
    """Import ``module:QualName`` and return the named class.

    Raises:
        ValueError: If *path* is malformed or does not name a
            MediaDefiningClass subclass.
        ImportError: If the module cannot be imported.
        AttributeError: If the module has no such attribute.
    """
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"expected <module:Class>, got {path!r}")

    target = importlib.import_module(module_name)
    for part in qualname.split("."):
        target = getattr(target, part)

    if not (isinstance(target, type) and issubclass(target, MediaDefiningClass)):
        raise ValueError(f"{path} is not a MediaDefiningClass subclass")
    return target


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------

def cmd_show(argv: list[str]) -> int:
    parser = argparse.ArgumentParser(prog="media show", add_help=True)
    parser.add_argument("target", metavar="MODULE:CLASS",
                        help="Class to inspect, e.g. myapp.forms:ContactForm")
    parser.add_argument("--kind", dest="kinds", action="append", metavar="KIND",
                        help="Only report this media kind (repeatable; "
                             f"conventional kinds: {', '.join(k.value for k in MediaKind)})")

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code) if exc.code is not None else 2

    try:
        cls = _load_class(args.target)
        report = MediaReport.for_class(cls, kinds=args.kinds)
    except (ImportError, AttributeError, ValueError, MediaError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(report.model_dump(), indent=2))
    return 0


# ---------------------------------------------------------------------------
# entry point
# ---------------------------------------------------------------------------

def main() -> None:
    if len(sys.argv) < 2:
        print(_USAGE, file=sys.stderr)
        sys.exit(2)

    subcmd, rest = sys.argv[1], sys.argv[2:]

    if subcmd == "show":
        sys.exit(cmd_show(rest))
    else:
        print(f"Unknown subcommand: {subcmd!r}\n{_USAGE}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
