"""Command-line interface for the caption cleaner.

WHY: Caption tracks are usually fetched by another tool (yt-dlp, a
transcript API) and land on disk as .vtt/.srt/.txt files. The CLI cleans
one or many of them in one command and files the results where the
summarizer expects them.

HOW: Uses argparse to accept input paths (or "-" for stdin), dedup
overrides, output format selection, and an output directory. Builds a
validated DedupConfig, runs clean_many() over all inputs, then writes
each result through the selected formatters into a DirectorySink (or
prints the cleaned text with --stdout). Status messages go to stderr.

RULES:
- Positional arguments: one or more caption files, "-" reads stdin
- File extensions are checked against SUPPORTED_CAPTION_FORMATS
- --formats: comma-separated formatter keys (default: plain_text)
- Output naming: {stem}{suffix} inside --output-dir (default from config)
- --stdout prints cleaned text to stdout and writes no files
- Any error prints "Error: ..." to stderr and exits with status 1
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, NoReturn, Optional

from caption_cleaner.config import (
    DEFAULT_OUTPUT_DIR,
    SUPPORTED_CAPTION_FORMATS,
    DedupConfig,
    load_config,
)
from caption_cleaner.core.pipeline import clean_many
from caption_cleaner.formatters import DEFAULT_FORMATS, FORMATTERS
from caption_cleaner.sink import DirectorySink, validate_identifier

STDIN_MARKER = "-"


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> NoReturn:
    _status("Error: {}".format(msg))
    sys.exit(1)


def _parse_formats(raw: Optional[str]) -> List[str]:
    """Split and check the --formats value.

    Raises:
        ValueError: If a key is not a registered formatter.
    """
    if not raw:
        return list(DEFAULT_FORMATS)
    keys = [f.strip() for f in raw.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            raise ValueError(
                "Unknown format '{}'. Available formats: {}".format(
                    key, ", ".join(sorted(FORMATTERS))
                )
            )
    return keys


def _read_inputs(inputs: List[str], stdin_name: str) -> Dict[str, str]:
    """Read every input into a {source name: raw document} mapping.

    Raises:
        ValueError: On a missing file, unsupported extension, or two
            inputs that would be filed under the same name.
    """
    documents: Dict[str, str] = {}
    for item in inputs:
        if item == STDIN_MARKER:
            name, raw = stdin_name, sys.stdin.read()
        else:
            path = Path(item)
            if not path.is_file():
                raise ValueError("File not found: {}".format(path))
            if path.suffix.lower() not in SUPPORTED_CAPTION_FORMATS:
                raise ValueError(
                    "Unsupported file type '{}'. Supported formats: {}".format(
                        path.suffix, ", ".join(sorted(SUPPORTED_CAPTION_FORMATS))
                    )
                )
            name, raw = path.stem, path.read_text(encoding="utf-8", errors="replace")
        if name in documents:
            raise ValueError("Two inputs share the name '{}'".format(name))
        documents[name] = raw
    return documents


def _build_config(args: argparse.Namespace) -> DedupConfig:
    return load_config(
        pattern_threshold=args.pattern_threshold,
        sentence_threshold=args.sentence_threshold,
        max_pattern_window=args.max_window,
        min_pattern_window=args.min_window,
        min_content_word_length=args.min_word_length,
        fingerprint_width=args.fingerprint_width,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - Positional: inputs (one or more, "-" for stdin)
    - Dedup overrides default to None so env/config defaults apply
    """
    parser = argparse.ArgumentParser(
        prog="caption_cleaner",
        description="Remove sliding-window repetition from auto-generated "
                    "caption files (WebVTT, SRT, or plain text).",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Caption files to clean. Use '-' to read from stdin.",
    )
    parser.add_argument(
        "--name",
        default="stdin",
        help="Output name for the stdin document (default: %(default)s).",
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory to save cleaned transcripts (default: %(default)s).",
    )
    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: {}.".format(
                 ", ".join(sorted(FORMATTERS)), ", ".join(DEFAULT_FORMATS)
             ),
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the cleaned text to stdout instead of writing files.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of documents cleaned in parallel (default: executor default).",
    )
    parser.add_argument("--pattern-threshold", type=float, default=None,
                        help="Block match ratio counted as a repeated pattern.")
    parser.add_argument("--sentence-threshold", type=float, default=None,
                        help="Fingerprint overlap counted as a duplicate sentence.")
    parser.add_argument("--max-window", type=int, default=None,
                        help="Longest word pattern tried.")
    parser.add_argument("--min-window", type=int, default=None,
                        help="Shortest word pattern tried.")
    parser.add_argument("--min-word-length", type=int, default=None,
                        help="Minimum length of a fingerprint content word.")
    parser.add_argument("--fingerprint-width", type=int, default=None,
                        help="Number of content words in a sentence fingerprint.")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log per-stage details.",
    )
    return parser


def run(args: argparse.Namespace) -> None:
    """Clean every input and write or print the results.

    RULES:
    - Argument and input problems, including names that cannot be used
      as output file names, are reported before any cleaning starts
    - With --stdout, documents are printed in input order, one per line
    - A failed write stops the run with exit status 1
    """
    try:
        config = _build_config(args)
        format_keys = _parse_formats(args.formats)
        documents = _read_inputs(args.inputs, args.name)
        if not args.stdout:
            for name in documents:
                validate_identifier(name)
    except ValueError as exc:
        _fail(str(exc))

    results = clean_many(documents, config, max_workers=args.workers)

    sink = DirectorySink(args.output_dir)
    for name, result in results.items():
        stats = result.stats
        _status(
            "{}: {} lines, {} -> {} words, {} chars".format(
                name,
                stats.original_line_count,
                stats.original_word_count,
                stats.cleaned_word_count,
                stats.cleaned_char_length,
            )
        )
        if args.stdout:
            print(result.text)
            continue
        outputs = []
        for key in format_keys:
            outputs.extend(FORMATTERS[key]().format(result))
        try:
            paths = sink.write(name, outputs)
        except (ValueError, OSError) as exc:
            _fail("Could not save {}: {}".format(name, exc))
        for path in paths:
            _status("  Saved: {}".format(path))


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    run(args)


if __name__ == "__main__":
    main()
