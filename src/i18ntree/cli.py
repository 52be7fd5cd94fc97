"""i18ntree command-line interface.

Usage:
    i18ntree check strings.json
    i18ntree keys strings.json -o src/game/i18n_keys.py --namespace game
    i18ntree charset strings.json --numeric -o build/charset.txt
    i18ntree resolve strings.json menu.greeting --lang en --set name=World
    i18ntree children strings.json menu
    i18ntree --config pyproject.toml resolve menu.greeting
    i18ntree stale strings.json src/game/i18n_keys.py

Settings not given on the command line are read from [tool.i18ntree] in
the file named by --config.

Exit Codes:
    0: Success
    1: Resource, resolution or generation error (or stale output)
    2: Usage or configuration error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import replace
from pathlib import Path

from i18ntree.config import GeneratorConfig, load_config
from i18ntree.constants import DEFAULT_ROOT_CLASS
from i18ntree.diagnostics import DiagnosticFormatter, I18nTreeError, OutputFormat
from i18ntree.generation import CharsetEmitter, KeyClassEmitter, is_stale
from i18ntree.languages import LanguageRegistry, load_language_registry
from i18ntree.runtime import Resolver
from i18ntree.tree import ResourceTree, parse_file

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2


class _Session:
    """Merged settings and lazily loaded inputs for one invocation."""

    def __init__(self, args: argparse.Namespace, config: GeneratorConfig) -> None:
        self.args = args
        self.config = config
        self.formatter = DiagnosticFormatter(OutputFormat(args.format), color=False)
        self._registry: LanguageRegistry | None = None

    @property
    def registry(self) -> LanguageRegistry:
        if self._registry is None:
            self._registry = load_language_registry(self.config.languages)
        return self._registry

    def load_tree(self) -> ResourceTree:
        source = self.args.source or self.config.source
        if source is None:
            msg = "no resource file given (pass SOURCE or set 'source' in [tool.i18ntree])"
            raise _UsageError(msg)
        return parse_file(source, self.registry)


class _UsageError(Exception):
    """Missing argument that may come from either the command line or config."""


def _parse_substitutions(pairs: Sequence[str]) -> dict[str, object]:
    substitutions: dict[str, object] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            msg = f"--set expects NAME=VALUE, got {pair!r}"
            raise _UsageError(msg)
        substitutions[name] = value
    return substitutions


def _cmd_check(session: _Session) -> int:
    tree = session.load_tree()
    for warning in tree.warnings:
        print(session.formatter.format_warning(warning))
    print(
        f"OK: {tree.node_count} node(s), {len(tree.warnings)} warning(s), "
        f"languages: {', '.join(tree.languages)}"
    )
    return EXIT_OK


def _cmd_keys(session: _Session) -> int:
    config = session.config
    output = session.args.output or config.output
    if output is None:
        msg = "no output file given (pass -o or set 'output' in [tool.i18ntree])"
        raise _UsageError(msg)
    emitter = KeyClassEmitter(
        namespace=config.namespace,
        indent_width=config.indent_width,
        root_class=session.args.root_class,
    )
    emitter.write(session.load_tree(), output)
    print(f"Wrote {output}")
    return EXIT_OK


def _cmd_charset(session: _Session) -> int:
    config = session.config
    emitter = CharsetEmitter(
        include_numeric_set=config.include_numeric,
        registry=session.registry if session.args.language_names else None,
    )
    tree = session.load_tree()
    output = session.args.output or config.charset_output
    if output is None:
        print(emitter.render(tree))
    else:
        emitter.write(tree, output)
        print(f"Wrote {output}")
    return EXIT_OK


def _cmd_resolve(session: _Session) -> int:
    args = session.args
    substitutions = _parse_substitutions(args.set) if args.set else None
    resolver = Resolver(session.load_tree(), session.registry, strict=args.strict)
    language = args.lang or session.registry.fallback
    print(resolver.resolve(language, args.key, substitutions))
    return EXIT_OK


def _cmd_children(session: _Session) -> int:
    resolver = Resolver(session.load_tree(), session.registry)
    for key in resolver.get_child_keys(session.args.key):
        print(key)
    return EXIT_OK


def _cmd_stale(session: _Session) -> int:
    output = session.args.output or session.config.output
    if output is None:
        msg = "no generated file given (pass OUTPUT or set 'output' in [tool.i18ntree])"
        raise _UsageError(msg)
    if is_stale(output, session.load_tree()):
        print(f"{output} is stale; regenerate it with 'i18ntree keys'")
        return EXIT_ERROR
    print(f"{output} is up to date")
    return EXIT_OK


def _add_source(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "source",
        nargs="?",
        type=Path,
        help="Resource JSON file (default: 'source' from config)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="i18ntree",
        description="Validate, resolve and compile hierarchical multi-language string resources.",
    )
    parser.add_argument("--languages", type=Path, help="Language registry JSON file")
    parser.add_argument("--config", type=Path, help="pyproject.toml with a [tool.i18ntree] table")
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output style (default: rust)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Log errors only")

    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Parse and validate a resource file")
    _add_source(check)
    check.set_defaults(handler=_cmd_check)

    keys = commands.add_parser("keys", help="Generate the key class module")
    _add_source(keys)
    keys.add_argument("-o", "--output", type=Path, help="Module to write")
    keys.add_argument("--namespace", help="Dotted wrapper classes, e.g. 'game.text'")
    keys.add_argument("--indent", type=int, dest="indent_width", help="Spaces per indent level")
    keys.add_argument("--root-class", default=DEFAULT_ROOT_CLASS, help="Root class name")
    keys.set_defaults(handler=_cmd_keys)

    charset = commands.add_parser("charset", help="Print or write the character set")
    _add_source(charset)
    charset.add_argument("-o", "--output", type=Path, help="File to write (default: stdout)")
    charset.add_argument(
        "--numeric",
        action="store_true",
        dest="include_numeric",
        default=None,
        help="Include digits and number punctuation",
    )
    charset.add_argument(
        "--language-names",
        action="store_true",
        help="Include the characters of language display names",
    )
    charset.set_defaults(handler=_cmd_charset)

    resolve = commands.add_parser("resolve", help="Resolve one key path")
    _add_source(resolve)
    resolve.add_argument("key", help="Dotted key path")
    resolve.add_argument("--lang", help="Language code (default: fallback language)")
    resolve.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Substitution value (repeatable)",
    )
    resolve.add_argument(
        "--strict", action="store_true", help="Fail instead of printing a sentinel"
    )
    resolve.set_defaults(handler=_cmd_resolve)

    children = commands.add_parser("children", help="List child keys of a branch")
    _add_source(children)
    children.add_argument("key", help="Dotted key path")
    children.set_defaults(handler=_cmd_children)

    stale = commands.add_parser("stale", help="Check a generated key module against its source")
    _add_source(stale)
    stale.add_argument("output", nargs="?", type=Path, help="Generated module")
    stale.set_defaults(handler=_cmd_stale)

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _merge_config(args: argparse.Namespace) -> GeneratorConfig:
    """Apply command-line overrides on top of file settings."""
    config = load_config(args.config) if args.config else GeneratorConfig()
    overrides: dict[str, object] = {}
    if args.languages is not None:
        overrides["languages"] = args.languages
    for name in ("namespace", "indent_width", "include_numeric"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return replace(config, **overrides) if overrides else config  # type: ignore[arg-type]


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        config = _merge_config(args)
    except (OSError, ValueError) as e:
        print(f"i18ntree: configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    session = _Session(args, config)
    logger.debug("Running command %s", args.command)
    handler: Callable[[_Session], int] = args.handler
    try:
        return handler(session)
    except _UsageError as e:
        print(f"i18ntree: {e}", file=sys.stderr)
        return EXIT_USAGE
    except I18nTreeError as e:
        if e.diagnostic is not None:
            print(session.formatter.format(e.diagnostic), file=sys.stderr)
        else:
            print(f"i18ntree: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"i18ntree: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
