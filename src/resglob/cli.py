#!/usr/bin/env python3
"""
resglob: Resolve Ant-style resource expressions into resource lists

Common usage:
  resglob 'file:src/**/*.js' '~file:src/**/*Test.js'
  resglob --search-path lib/app.zip 'classpath:/app/**/*.js'
  resglob --format script-tags 'classpath:/app/*.js' 'https://cdn.example.com/lib.js'
  resglob --cat 'file:src/*.js'

Expressions starting with `~` are exclusions. Quote expressions so the shell
leaves globs and `~` alone.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from strif import atomic_output_file

from resglob.config import ConfigError, find_config_file, load_config, merge_cli_with_config
from resglob.reading import DEFAULT_TIMEOUT, read_text
from resglob.render import generate_script_tags
from resglob.resolver import (
    ResolverConfig,
    ResourceError,
    ResourceRef,
    ResourceSetResolver,
    SearchPathResolver,
)

FORMATS = ("list", "script-tags")


@dataclass
class Options:
    """Command-line options for the resglob tool."""

    expressions: list[str]
    search_path: list[str] | None
    max_workers: int
    format: str
    output: str
    cat: bool
    remote_timeout: float
    verbose: bool
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "expressions",
        nargs="*",
        type=str,
        default=[],
        help="Resource expressions, e.g. 'classpath:/app/**/*.js' or '~file:src/*Test.js'",
    )
    parser.add_argument(
        "--search-path",
        action="append",
        default=None,
        metavar="PATH",
        help="Directory or zip archive to search for classpath: expressions. "
        "Can be repeated (default: the Python import path)",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=4,
        metavar="N",
        help="Archives scanned concurrently (1 = sequential, default: %(default)s)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=FORMATS,
        default="list",
        help="'list' prints one locator per line, 'script-tags' prints HTML "
        "<script> tags (default: %(default)s)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default="-",
        help="Output file (use '-' for stdout)",
    )
    parser.add_argument(
        "--cat",
        action="store_true",
        help="Print the content of every resolved resource instead of its locator",
    )
    parser.add_argument(
        "--remote-timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help="Timeout for fetching remote resources with --cat (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log resolution details to stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied,
    # even when the user passes a value equal to the default.
    _SENTINEL = object()
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("--search-path", action="append", default=None)
    sentinel_parser.add_argument("--max-workers", type=int, default=_SENTINEL)
    sentinel_parser.add_argument("--format", default=_SENTINEL)
    sentinel_parser.add_argument("--remote-timeout", type=float, default=_SENTINEL)
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    if sentinel_opts.search_path is not None:
        explicit_flags.add("search_path")
    for name in ("max_workers", "format", "remote_timeout"):
        if getattr(sentinel_opts, name) is not _SENTINEL:
            explicit_flags.add(name)
    if opts.expressions:
        explicit_flags.add("expressions")

    return (
        Options(
            expressions=opts.expressions,
            search_path=opts.search_path,
            max_workers=opts.max_workers,
            format=opts.format,
            output=opts.output,
            cat=opts.cat,
            remote_timeout=opts.remote_timeout,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _render(refs: list[ResourceRef], options: Options, resolver: SearchPathResolver) -> str:
    if options.cat:
        return "".join(
            read_text(ref, location_resolver=resolver, timeout=options.remote_timeout)
            for ref in refs
        )
    if options.format == "script-tags":
        return generate_script_tags(refs) + "\n"
    return "".join(f"{ref}\n" for ref in refs)


def _write_output(text: str, output: str) -> None:
    if output == "-":
        sys.stdout.write(text)
        return
    with atomic_output_file(output, make_parents=True) as temp_path:
        Path(temp_path).write_text(text, encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the resglob CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("resglob")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Load and merge config file settings
    config_path = find_config_file(Path.cwd())
    if config_path:
        try:
            config = load_config(config_path)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, config, explicit_flags)

    if not options.expressions:
        print(
            "Error: No expressions specified. Provide expressions on the command line"
            " or in a config file. Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    if options.format not in FORMATS:
        print(f"Error: Unknown format: {options.format}", file=sys.stderr)
        return 1

    location_resolver = SearchPathResolver(options.search_path)
    resolver = ResourceSetResolver(
        location_resolver,
        ResolverConfig(search_path=options.search_path, max_workers=options.max_workers),
    )

    try:
        refs = resolver.expand(options.expressions)
        text = _render(refs, options, location_resolver)
    except ResourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write_output(text, options.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
