#!/usr/bin/env python3
"""
Hidden Character Explorer

A CLI tool for finding, explaining and comparing invisible or easily
confused Unicode characters in text files.

Usage:
    python -m hidchar.main chars                    List all notable characters
    python -m hidchar.main info <char>              Show details for one character
    python -m hidchar.main scan <file>              Count notable characters in a file
    python -m hidchar.main mark <file>              Print text with [glyph] markers
    python -m hidchar.main replace <file> <char>    Replace every occurrence of a character
    python -m hidchar.main compare <old> <new>      Word diff with visible markers

Characters can be given as U+200B, 0x200B, 200b, or the literal character.
Use "-" as a file name to read standard input.
"""

import argparse
import html
import logging
import sys

from hidchar.chars import (
    REGISTRY,
    EditorSession,
    OverlayIntegrityError,
    compose,
    copy_marked,
    entry_for,
    parse_code_point,
    sanitize,
    scan,
)
from hidchar.chars.registry import split_by_usage
from hidchar.chars.similarity import format_similarity
from hidchar.chars.word_diff import ADDED, NEW, OLD, REMOVED
from hidchar.loader import read_text, write_text


def truncate(text: str, max_len: int = 50) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def render_terminal_pane(segments) -> str:
    """Render overlay segments as plain text with [glyph] markers.

    Removed text is wrapped in ``[-...-]`` and added text in ``{+...+}``.
    """
    parts = []
    for segment in segments:
        chunk = []
        for piece in segment.pieces:
            if piece.marker is None:
                chunk.append(piece.text)
            else:
                chunk.append(f"[{piece.marker.glyph}]")
        text = "".join(chunk)
        if segment.status == REMOVED:
            text = f"[-{text}-]"
        elif segment.status == ADDED:
            text = f"{{+{text}+}}"
        parts.append(text)
    return "".join(parts)


def render_html_pane(segments) -> str:
    """Render overlay segments for one pane as sanitized HTML."""
    parts = []
    for segment in segments:
        markup = sanitize(segment.markup)
        if segment.status == REMOVED:
            markup = f"<del>{markup}</del>"
        elif segment.status == ADDED:
            markup = f"<ins>{markup}</ins>"
        parts.append(markup)
    return "".join(parts)


HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
.panes {{ display: flex; gap: 1em; }}
.pane {{ flex: 1; white-space: pre-wrap; font-family: monospace; border: 1px solid #ccc; padding: 0.5em; }}
del {{ background: #ffd7d5; text-decoration: none; }}
ins {{ background: #ccffd8; text-decoration: none; }}
.special-char-marker {{ background: #fff3b0; border: 1px solid #e0c000; border-radius: 2px; }}
</style>
</head>
<body>
<h1>{title}</h1>
<p>Similarity: {similarity}</p>
<div class="panes">
<div class="pane">{old}</div>
<div class="pane">{new}</div>
</div>
</body>
</html>
"""


# ============== Commands ==============

def cmd_chars(args):
    """List all registry characters."""
    header = f"{'CODE':<9} {'GLYPH':<7} {'NAME':<30} {'USAGE'}"
    print("-" * len(header))
    print(header)
    print("-" * len(header))
    for entry in REGISTRY.values():
        usage = entry.usage if args.long else truncate(entry.usage, 60)
        print(f"{entry.code:<9} {entry.glyph:<7} {entry.name:<30} {usage}")
    print("-" * len(header))
    print(f"{len(REGISTRY)} characters")


def cmd_info(args):
    """Show the full description of one character."""
    char = parse_code_point(args.char)
    entry = entry_for(char)
    if char not in REGISTRY:
        print(f"Note: {entry.code} is not in the registry", file=sys.stderr)

    print(f"{entry.long_name}")
    print("=" * 60)
    print(f"Unicode:     {entry.code}")
    print(f"Glyph:       {entry.glyph}")
    print(f"Description: {entry.name}")
    if entry.usage:
        print(f"\nUsage:\n  {entry.usage}")
    if entry.example:
        print("\nExample (marked):")
        for line in entry.example.split("\n"):
            print(f"  {copy_marked(line)}")


def cmd_scan(args):
    """Count notable characters in a file."""
    text = read_text(args.file, args.encoding)
    result = scan(text)
    used, _ = split_by_usage(result.frequencies)

    print(f"Characters:          {len(text):,}")
    print(f"Special characters:  {sum(result.frequencies.values()):,}")
    print(f"Distinct special:    {result.distinct_count}")

    if used:
        print()
        print(f"{'CODE':<9} {'GLYPH':<7} {'NAME':<30} {'COUNT':>8}")
        for entry in used:
            print(f"{entry.code:<9} {entry.glyph:<7} {entry.name:<30} {result.frequencies[entry.char]:>8,}")

    if args.positions:
        print()
        for token in result.tokens:
            print(f"  offset {token.offset:>8}  {token.entry.code:<9} {token.entry.name}")

    if args.fail_on_found and result.frequencies:
        sys.exit(2)


def cmd_mark(args):
    """Print the text with every notable character replaced by [glyph]."""
    text = read_text(args.file, args.encoding)
    sys.stdout.write(copy_marked(text))
    if not args.no_newline:
        sys.stdout.write("\n")


def cmd_replace(args):
    """Replace every occurrence of a character and write the result."""
    text = read_text(args.file, args.encoding)
    target = parse_code_point(args.char)
    replacement = args.replacement
    if args.replacement_char:
        replacement = parse_code_point(args.replacement_char)

    session = EditorSession(text)
    result = session.replace_all(target, replacement)
    entry = entry_for(target)
    print(f"{result.message} of {entry.name} ({entry.code})", file=sys.stderr)

    if args.output:
        write_text(args.output, session.text, args.encoding)
    else:
        sys.stdout.write(session.text)


def cmd_compare(args):
    """Compare two files with a word diff that keeps markers visible."""
    old = read_text(args.old, args.encoding)
    new = read_text(args.new, args.encoding)

    try:
        overlay = compose(old, new, elide_unchanged=args.diff_only)
    except OverlayIntegrityError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Similarity: {format_similarity(overlay.similarity)}")
    print("=" * 60)
    print(f"--- {args.old}")
    print(render_terminal_pane(overlay.old))
    print("=" * 60)
    print(f"+++ {args.new}")
    print(render_terminal_pane(overlay.new))
    print("=" * 60)

    if args.html:
        document = HTML_TEMPLATE.format(
            title=html.escape(f"{args.old} vs {args.new}"),
            similarity=format_similarity(overlay.similarity),
            old=render_html_pane(overlay.pane(OLD)),
            new=render_html_pane(overlay.pane(NEW)),
        )
        write_text(args.html, document)
        print(f"Wrote {args.html}")


def main():
    parser = argparse.ArgumentParser(
        description="Hidden Character Explorer - find and compare invisible Unicode characters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Chars command
    chars_parser = subparsers.add_parser('chars', help='List all notable characters')
    chars_parser.add_argument('-l', '--long', action='store_true', help='Show full usage notes')
    chars_parser.set_defaults(func=cmd_chars)

    # Info command
    info_parser = subparsers.add_parser('info', help='Show details for one character')
    info_parser.add_argument('char', help='Character reference (e.g., U+200B)')
    info_parser.set_defaults(func=cmd_info)

    # Scan command
    scan_parser = subparsers.add_parser('scan', help='Count notable characters in a file')
    scan_parser.add_argument('file', help='Text file path ("-" for stdin)')
    scan_parser.add_argument('-p', '--positions', action='store_true', help='List every occurrence with its offset')
    scan_parser.add_argument('--fail-on-found', action='store_true', help='Exit with status 2 if any are found')
    scan_parser.add_argument('--encoding', default='utf-8', help='File encoding (default: utf-8)')
    scan_parser.set_defaults(func=cmd_scan)

    # Mark command
    mark_parser = subparsers.add_parser('mark', help='Print text with [glyph] markers')
    mark_parser.add_argument('file', help='Text file path ("-" for stdin)')
    mark_parser.add_argument('-n', '--no-newline', action='store_true', help='Do not append a trailing newline')
    mark_parser.add_argument('--encoding', default='utf-8', help='File encoding (default: utf-8)')
    mark_parser.set_defaults(func=cmd_mark)

    # Replace command
    replace_parser = subparsers.add_parser('replace', help='Replace every occurrence of a character')
    replace_parser.add_argument('file', help='Text file path ("-" for stdin)')
    replace_parser.add_argument('char', help='Character to replace (e.g., U+00A0)')
    replace_parser.add_argument('-w', '--with', dest='replacement', default='', help='Replacement text (default: delete)')
    replace_parser.add_argument('-c', '--with-char', dest='replacement_char', help='Replacement character reference (e.g., U+0020)')
    replace_parser.add_argument('-o', '--output', help='Write result to this file instead of stdout')
    replace_parser.add_argument('--encoding', default='utf-8', help='File encoding (default: utf-8)')
    replace_parser.set_defaults(func=cmd_replace)

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Word diff with visible markers')
    compare_parser.add_argument('old', help='Original text file')
    compare_parser.add_argument('new', help='Comparison text file')
    compare_parser.add_argument('-d', '--diff-only', action='store_true', help='Hide unchanged text')
    compare_parser.add_argument('--html', help='Also write an HTML report to this path')
    compare_parser.add_argument('--encoding', default='utf-8', help='File encoding (default: utf-8)')
    compare_parser.set_defaults(func=cmd_compare)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except UnicodeDecodeError as e:
        print(f"Error: Cannot decode input as {args.encoding}: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
