#!/usr/bin/env python3
"""
Command line for recovering boards from snapshots and checking exports
"""

import argparse
import sys
from collections import Counter

from .codec import export_filename, load_document, save_document
from .config import load_settings
from .errors import ConfigError, EngineError, ImportFailed
from .logging_config import setup_logging
from .models import SECTIONS
from .ocr import TesseractEngine, load_image
from .recovery import BoardRecovery


def print_summary(notes):
    counts = Counter(note.section for note in notes)
    for section in SECTIONS:
        print(f"  {section:<10} {counts.get(section, 0)}")
    print(f"  {'total':<10} {len(notes)}")


def cmd_recover(args, settings):
    image = load_image(args.image_path)
    height, width = image.shape[:2]
    print(f"Loaded {args.image_path} ({width}x{height})")

    print(f"Recognizing text ({settings.ocr_language})...")
    engine = TesseractEngine(tesseract_path=settings.tesseract_path)
    fragments = engine.recognize(image, settings.ocr_language)
    print(f"Found {len(fragments)} text blocks")

    recovery = BoardRecovery(image, max_workers=settings.recovery_workers)
    recovered = recovery.recover_with_sources(fragments)
    notes = [note for note, _ in recovered]

    if settings.debug:
        print("\n=== Debug Summary ===")
        for key, value in recovery.stats.items():
            print(f"{key}: {value}")
        print("=" * 40)

    output = args.output or export_filename(args.board_name)
    save_document(notes, output)
    print(f"\nRecovered {len(notes)} notes:")
    print_summary(notes)

    if args.overlay:
        recovery.create_overlay_image(recovered, args.overlay)
        print(f"- Overlay image: {args.overlay}")
    print(f"- JSON data: {output}")
    return 0


def cmd_import(args, settings):
    notes = load_document(args.path)
    print(f"Read {len(notes)} notes from {args.path}")
    print_summary(notes)
    if args.output:
        save_document(notes, args.output)
        print(f"Re-exported with new ids to {args.output}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog='sticky-board',
                                     description='Export, import and recover retrospective boards')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode (overrides DEBUG_MODE env var)')
    sub = parser.add_subparsers(dest='command', required=True)

    recover = sub.add_parser('recover', help='Recover notes from a board snapshot image')
    recover.add_argument('image_path', help='Path to the board image (PNG/JPG)')
    recover.add_argument('-o', '--output', help='Output .json path (default: <board name>-<date>.json)')
    recover.add_argument('--board-name', help='Board name used for the default output file name')
    recover.add_argument('--lang', help='OCR language hint (overrides OCR_LANGUAGE env var)')
    recover.add_argument('--tesseract-path', help='Path to tesseract executable (overrides TESSERACT_PATH env var)')
    recover.add_argument('--workers', type=int, help='Worker threads for fragment resolution (overrides RECOVERY_WORKERS)')
    recover.add_argument('--overlay', help='Write an image with the recovered notes outlined')
    recover.set_defaults(handler=cmd_recover)

    imp = sub.add_parser('import', help='Validate a portable board document')
    imp.add_argument('path', help='Path to a .json export')
    imp.add_argument('-o', '--output', help='Re-export the notes, with fresh ids, to this path')
    imp.set_defaults(handler=cmd_import)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Command line arguments take precedence over environment variables
    try:
        settings = load_settings(
            debug=True if args.debug else None,
            tesseract_path=getattr(args, 'tesseract_path', None),
            ocr_language=getattr(args, 'lang', None),
            recovery_workers=getattr(args, 'workers', None),
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    setup_logging(settings.debug)

    try:
        return args.handler(args, settings)
    except ImportFailed as e:
        print(f"Import failed: {e}", file=sys.stderr)
    except EngineError as e:
        print(f"Error: {e}", file=sys.stderr)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
