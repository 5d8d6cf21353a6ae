"""
Command-line entry point.

    idscan --aadhaar front1.jpg e-aadhaar.pdf --pan pan.png --csv out/
    idscan --text --aadhaar ocr_dump.txt --history history.json
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

from .config import get_config
from .exceptions import IdScanError
from .logger import get_logger, log_timing, set_debug
from .models import BatchStats, CardType, DocumentInput, ExtractionResult, ResultSet
from .persistence import ALL_CARDS, HistoryStore, write_results_csv
from .processors import process_documents

console = Console()


def get_progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def load_documents(paths: List[str], card_type: CardType, as_text: bool) -> List[DocumentInput]:
    documents = []
    for raw_path in paths:
        path = Path(raw_path)
        if as_text:
            documents.append(DocumentInput(
                path.name, card_type,
                text=path.read_text(encoding="utf-8", errors="replace"),
                source_reference=str(path),
            ))
        else:
            documents.append(DocumentInput(
                path.name, card_type,
                image_bytes=path.read_bytes(),
                source_reference=str(path),
            ))
    return documents


def render_results(results: ResultSet) -> Table:
    table = Table(title="Extracted Data", show_lines=True)
    for header in ("File", "Card", "Number", "Name", "DOB", "Address", "Mobile"):
        table.add_column(header, overflow="fold")

    for result in results:
        style = "red" if result.is_failed else None
        table.add_row(
            result.file_name,
            result.card_type.value,
            result.number,
            result.name,
            result.dob or "",
            result.address or "",
            result.mobile or "",
            style=style,
        )
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="idscan",
        description="Extract structured fields from Aadhaar and PAN card scans",
    )
    parser.add_argument("--aadhaar", nargs="+", default=[], metavar="FILE", help="Aadhaar card images or PDFs")
    parser.add_argument("--pan", nargs="+", default=[], metavar="FILE", help="PAN card images or PDFs")
    parser.add_argument(
        "--text", action="store_true",
        help="Inputs are raw OCR text files (skips the OCR engine)",
    )
    parser.add_argument("--csv", metavar="PATH", help="Write results to a CSV file or directory")
    parser.add_argument(
        "--card-filter", default=ALL_CARDS, choices=["ALL", "AADHAAR", "AADHAR", "PAN"],
        help="Card type written to the CSV (default: ALL)",
    )
    parser.add_argument("--history", metavar="PATH", help="Append results to a history JSON file")
    parser.add_argument("--debug", action="store_true", help="Verbose logging and raw OCR dumps")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    logger = get_logger("idscan")
    if args.debug:
        config.debug = True
        set_debug(True)

    try:
        documents = (
            load_documents(args.aadhaar, CardType.AADHAAR, args.text)
            + load_documents(args.pan, CardType.PAN, args.text)
        )
    except OSError as e:
        logger.error(f"Could not read input: {e}")
        return 2
    if not documents:
        console.print("[yellow]No documents given. Use --aadhaar and/or --pan.[/yellow]")
        return 2

    logger.info(f"Processing {len(documents)} document(s) with {config.batch.max_workers} worker(s)")
    start_time = time.perf_counter()
    progress = get_progress()

    try:
        with progress:
            task = progress.add_task("Extracting", total=len(documents))

            def on_document_complete(
                document: DocumentInput, result: Optional[ExtractionResult], stats: BatchStats
            ) -> None:
                progress.update(task, advance=1, description=document.file_name)

            context = process_documents(documents, config=config, on_document_complete=on_document_complete)
    except IdScanError as e:
        logger.error(f"Batch aborted: {e}")
        return 1

    stats = context.stats
    console.print(render_results(context.results))
    for note in stats.notifications:
        console.print(f"[yellow]{note}[/yellow]")
    console.print(stats.status_text)

    try:
        if args.csv:
            path = write_results_csv(context.results, args.csv, args.card_filter)
            console.print(f"CSV written to {path}")
        if args.history:
            added = HistoryStore(args.history).extend(context.results)
            console.print(f"{added} record(s) added to {args.history}")
    except IdScanError as e:
        logger.error(str(e))
        return 1

    elapsed = time.perf_counter() - start_time
    log_timing(logger, "Batch", elapsed)
    return 1 if stats.timed_out else 0


if __name__ == "__main__":
    sys.exit(main())
