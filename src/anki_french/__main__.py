from __future__ import annotations

import argparse
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from anki_french.anki_sync.anki_connect import AnkiConnectClient, DEFAULT_ANKI_CONNECT_URL
from anki_french.common.logging_config import setup_logging
from anki_french.config_models import RunConfig, load_decks, load_run_config
from anki_french.errors import AnkiConnectError, DeckFileError
from anki_french.lookup.audio import AudioFetcher
from anki_french.lookup.larousse import LarousseConjugationLookup, LarousseDefinitionLookup
from anki_french.processor import DeckProcessor, RunReport

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("config.yaml")


def _write_notes(report: RunReport, output_file: Path) -> None:
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(
        json.dumps([note.to_payload() for note in report.notes], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logger.info(f"Notes saved to: {output_file}")


def run_from_config(
    config_path: Optional[Path] = None,
    decks_file: Optional[Path] = None,
    log_level: str = "INFO",
) -> RunReport:
    """Load decks, build their notes and add them to Anki.

    If config_path is None, or is the default ./config.yaml and does not exist,
    the built-in defaults are used.

    Args:
        config_path: Path to the YAML run configuration
        decks_file: Deck file overriding the configured one
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    setup_logging(log_level)

    if config_path == DEFAULT_CONFIG and not config_path.exists():
        config_path = None
    cfg: RunConfig = load_run_config(config_path)

    path = decks_file or cfg.decks_file
    try:
        decks = load_decks(path)
    except DeckFileError as e:
        raise SystemExit(str(e))

    anki_url = os.getenv("ANKI_CONNECT_URL") or cfg.anki_connect_url or DEFAULT_ANKI_CONNECT_URL
    anki = AnkiConnectClient(anki_url, allow_duplicate=cfg.allow_duplicates)
    try:
        version = anki.version()
    except AnkiConnectError as e:
        raise SystemExit(
            f"Could not connect to AnkiConnect at {anki_url}: {e}\n"
            f"Start Anki with the AnkiConnect add-on enabled, or set ANKI_CONNECT_URL."
        )
    logger.info("Connected to AnkiConnect", extra={"url": anki_url, "version": version, "decks_file": str(path)})

    processor = DeckProcessor(
        conjugations=LarousseConjugationLookup(timeout=cfg.http_timeout_seconds),
        definitions=LarousseDefinitionLookup(timeout=cfg.http_timeout_seconds),
        audio_fetcher=AudioFetcher(timeout=cfg.http_timeout_seconds),
        anki=anki,
        skip_existing_media=cfg.skip_existing_media,
    )
    report = processor.run(decks)

    print(
        f"Sync complete: {report.notes_added} added, {report.notes_failed} failed, "
        f"{len(report.failures)} words skipped"
    )
    for failure in report.failures:
        print(f"  skipped [{failure.category.value}] {failure.deck_name}: {failure.word} ({failure.reason})")

    if cfg.output_file is not None:
        _write_notes(report, cfg.output_file)

    return report


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Build French study notes and add them to Anki")
    parser.add_argument(
        "--config",
        required=False,
        default=str(DEFAULT_CONFIG),
        help="Path to YAML config (defaults to ./config.yaml, optional)",
    )
    parser.add_argument(
        "--decks",
        required=False,
        default=None,
        help="Path to the JSON deck file (overrides decks_file from the config)",
    )
    parser.add_argument(
        "--log-level",
        required=False,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO). Use DEBUG to see every lookup URL.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any word was skipped or any note was rejected",
    )
    args = parser.parse_args(argv)

    report = run_from_config(
        config_path=Path(args.config),
        decks_file=Path(args.decks) if args.decks else None,
        log_level=args.log_level,
    )
    if args.strict and not report.ok:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
