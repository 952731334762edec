"""
Command-line helper: export markdown reports as PDF and/or PowerPoint files.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from tqdm import tqdm

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from report_export.delivery import deliver, export_filename
from report_export.errors import ExportError
from report_export.markdown import build_document, extract_title
from report_export.pdf import PageSettings, register_ttf_font, render_pdf
from report_export.slides import SlideSettings, render_pptx

_FORMATS = {
    "pdf": ["pdf"],
    "pptx": ["pptx"],
    "both": ["pdf", "pptx"],
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the export script."""

    parser = argparse.ArgumentParser(
        description="Export markdown reports to PDF and/or PowerPoint."
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="Markdown files to export.",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=sorted(_FORMATS),
        default="pdf",
        help="Output format (default: pdf).",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=Path("output"),
        help="Directory into which exported files are written.",
    )
    parser.add_argument(
        "--title",
        help=(
            "Document title. Defaults to the first '# ' heading, then the file name. "
            "Applies to every input."
        ),
    )
    parser.add_argument("--category", help="Category shown in the PDF header.")
    parser.add_argument("--description", help="Description shown on the first PDF page.")
    parser.add_argument(
        "--tags",
        nargs="+",
        metavar="TAG",
        help="Tags listed after the last PDF section.",
    )
    parser.add_argument(
        "--prompt",
        help="Original prompt, shown on an introduction slide in decks.",
    )
    parser.add_argument(
        "--brand",
        help="Text appended to PDF footers and shown on deck cover/closing slides.",
    )
    parser.add_argument(
        "--font",
        type=Path,
        help="Optional TrueType font for PDF body text.",
    )
    parser.add_argument(
        "--keep-markup",
        action="store_true",
        help="Draw inline markdown (**, `, links) verbatim instead of stripping it.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser.parse_args(argv)


def _page_settings(args: argparse.Namespace) -> PageSettings:
    """Return PDF settings adjusted by CLI flags.

    Args:
        args: Parsed CLI arguments.
    Returns:
        PageSettings instance.
    """

    settings = PageSettings(
        footer_brand=args.brand,
        strip_inline_markup=not args.keep_markup,
    )
    if args.font:
        settings.font_name = register_ttf_font(args.font)
    return settings


def _slide_settings(args: argparse.Namespace) -> SlideSettings:
    """Return deck settings adjusted by CLI flags."""

    settings = SlideSettings(strip_inline_markup=not args.keep_markup)
    if args.brand:
        settings.brand = args.brand
    return settings


def _export_one(
    *,
    path: Path,
    args: argparse.Namespace,
    page_settings: PageSettings,
    slide_settings: SlideSettings,
) -> List[Path]:
    """Export a single markdown file in every requested format.

    Args:
        path: Markdown file.
        args: Parsed CLI arguments.
        page_settings: PDF settings.
        slide_settings: Deck settings.
    Returns:
        Paths actually written.
    """

    markdown = path.read_text(encoding="utf-8")
    title = args.title or extract_title(markdown) or path.stem
    written: List[Path] = []
    for fmt in _FORMATS[args.format]:
        if fmt == "pdf":
            document = build_document(
                markdown,
                title=title,
                category=args.category,
                description=args.description,
                tags=args.tags,
            )
            data = render_pdf(document=document, settings=page_settings)
        else:
            data = render_pptx(
                title=title,
                markdown=markdown,
                prompt=args.prompt,
                settings=slide_settings,
            )
        target = args.output_dir / export_filename(title, fmt)
        written.append(deliver(data, target))
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Export every input file and report where results landed.

    Example:
        >>> main(["report.md", "--format", "both"])  # doctest: +SKIP
        0
    """

    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        page_settings = _page_settings(args)
    except ExportError as exc:
        logging.error("%s", exc)
        return 1
    slide_settings = _slide_settings(args)
    failures = 0
    for path in tqdm(args.inputs, desc="Exporting reports", unit="file"):
        try:
            written = _export_one(
                path=path,
                args=args,
                page_settings=page_settings,
                slide_settings=slide_settings,
            )
        except (ExportError, OSError) as exc:
            logging.error("Failed to export %s: %s", path, exc)
            failures += 1
            continue
        for target in written:
            tqdm.write(f"Wrote {target}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
