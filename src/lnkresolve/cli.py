"""CLI entry point: ``lnkresolve resolve`` / ``lnkresolve list``."""

import argparse
import codecs
import json
import logging
import sys
from pathlib import Path

from ._constants import ANSI_CODEPAGE
from ._types import TargetType
from .listing import iter_resolved
from .resolver import ResolveError, links_to_directory, resolve

TYPE_CHOICES = [t.value for t in TargetType]


def _parse_codepage(val: str) -> str:
    """Validate a codec name for 8-bit path strings."""
    try:
        codecs.lookup(val)
    except LookupError:
        raise argparse.ArgumentTypeError(f"Unknown codepage: {val!r}") from None
    return val


def _resolve_one(path: str, args: argparse.Namespace) -> dict:
    """Resolve *path* into a JSON-friendly result dict."""
    try:
        data = Path(path).read_bytes()
        target = resolve(data, args.type, codepage=args.codepage)
    except (ResolveError, OSError) as e:
        return {"file": path, "error": str(e)}
    return {"file": path, "target": target, "directory": links_to_directory(data)}


def _cmd_resolve(args: argparse.Namespace) -> int:
    results = [_resolve_one(path, args) for path in args.files]

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        for res in results:
            if "target" in res:
                print(res["target"])

    failed = [res for res in results if "error" in res]
    for res in failed:
        print(f"[-] {res['file']}: {res['error']}", file=sys.stderr)
    return 1 if failed else 0


def _cmd_list(args: argparse.Namespace) -> int:
    try:
        for path in iter_resolved(
            args.directory, args.type, recursive=args.recursive
        ):
            print(path)
    except OSError as e:
        print(f"[-] {args.directory}: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="lnkresolve",
        description="Resolve Windows .lnk shortcut targets (MS-SHLLINK)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log decoding details"
    )
    sub = parser.add_subparsers(dest="command")

    # -- resolve --
    rp = sub.add_parser("resolve", help="Print the target path of .lnk file(s)")
    rp.add_argument("files", nargs="+", help="LNK file(s) to resolve")
    rp.add_argument(
        "-t",
        "--type",
        choices=TYPE_CHOICES,
        default=TargetType.ANY.value,
        help="Only accept links to this kind of entity",
    )
    rp.add_argument(
        "--codepage",
        type=_parse_codepage,
        default=ANSI_CODEPAGE,
        help=f"Encoding of non-Unicode paths (default: {ANSI_CODEPAGE})",
    )
    rp.add_argument("--json", action="store_true", help="Output as JSON")

    # -- list --
    lp = sub.add_parser("list", help="List a directory, following shortcuts")
    lp.add_argument("directory", help="Directory to list")
    lp.add_argument(
        "-t",
        "--type",
        choices=TYPE_CHOICES,
        default=TargetType.ANY.value,
        help="Only follow links to this kind of entity",
    )
    lp.add_argument(
        "-r", "--recursive", action="store_true", help="Descend into directories"
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "resolve":
        sys.exit(_cmd_resolve(args))
    elif args.command == "list":
        sys.exit(_cmd_list(args))


if __name__ == "__main__":
    main()
