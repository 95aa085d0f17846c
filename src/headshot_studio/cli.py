"""CLI entry point for the headshot generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from headshot_generation import DEFAULT_MODEL, DEFAULT_STYLE, HEADSHOT_STYLES, HeadshotError
from headshot_generation.credentials import KeyFileCredentialProvider, load_env_files
from . import __version__
from .pipeline import DEFAULT_OUTPUT_DIR, UploadError, run_generation

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Professional headshot generator")
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("styles", help="List the available headshot styles")

    generate = sub.add_parser("generate", help="Generate three headshot variations from a photo")
    generate.add_argument("--image", required=True, type=Path, help="Path to your photo (max 5MB)")
    generate.add_argument(
        "--style",
        default=DEFAULT_STYLE,
        choices=sorted(HEADSHOT_STYLES),
        help=f"Headshot style (default: {DEFAULT_STYLE})",
    )
    generate.add_argument(
        "--outdir", type=Path, default=DEFAULT_OUTPUT_DIR, help="Directory for outputs"
    )
    generate.add_argument(
        "--prompt", default=None, help="Override the style's base prompt"
    )
    generate.add_argument(
        "--model", default=None, help=f"Model override (default: {DEFAULT_MODEL})"
    )
    generate.add_argument(
        "--select", type=int, default=None, help="Save only this variation (1-3)"
    )
    generate.add_argument(
        "--no-compare", action="store_true", help="Skip the side-by-side comparison sheet"
    )
    generate.add_argument(
        "--sequential", action="store_true", help="Request variations one at a time"
    )
    generate.add_argument(
        "--api-key", default=None, help="API key override (else GEMINI_API_KEY/GOOGLE_API_KEY or key file)"
    )

    set_key = sub.add_parser("set-key", help="Persist an API key in the local key file")
    set_key.add_argument("key", help="Gemini API key")

    return parser


def main(argv: list[str] | None = None) -> int:
    # Load .env if present (ignored if values already in env)
    load_env_files()

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s | %(message)s",
    )

    if args.version:
        print(__version__)
        return 0

    if args.command == "styles":
        for style in HEADSHOT_STYLES.values():
            print(f"{style.id:<14} {style.name:<22} {style.description}")
        return 0

    if args.command == "set-key":
        path = KeyFileCredentialProvider().store(args.key)
        print(f"Saved API key to {path}")
        return 0

    if args.command == "generate":
        if args.select is not None and not 1 <= args.select <= 3:
            parser.error("--select must be 1, 2 or 3")
        try:
            summary = run_generation(
                image_path=args.image,
                style=args.style,
                output_dir=args.outdir,
                prompt=args.prompt,
                model=args.model,
                api_key=args.api_key,
                select=args.select,
                compare=not args.no_compare,
                concurrent=not args.sequential,
            )
        except (HeadshotError, UploadError, OSError) as exc:
            logger.debug("Generation failed", exc_info=exc)
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        print(json.dumps(summary, indent=2))
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
