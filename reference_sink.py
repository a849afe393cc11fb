"""Plain-text file sink for exported references."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

DEFAULT_OUTPUT_PATH = "references.bib"

LOGGER = logging.getLogger(__name__)


def write_references(references: Iterable[str], path: str | Path | None = None) -> int:
    """Append each reference to the output file as it arrives.

    Entries are stripped and separated by a blank line. The file is flushed
    after every entry, so references written before an error are kept. When
    ``path`` is not given, REFERENCE_OUTPUT_PATH (or ``references.bib``) is used.

    Returns:
        Number of references written.
    """
    output = Path(path or os.getenv("REFERENCE_OUTPUT_PATH", DEFAULT_OUTPUT_PATH))
    output.parent.mkdir(parents=True, exist_ok=True)
    needs_separator = output.exists() and output.stat().st_size > 0

    written = 0
    with output.open("a", encoding="utf-8") as fh:
        for reference in references:
            text = reference.strip()
            if not text:
                LOGGER.warning("Skipping empty reference body")
                continue
            if needs_separator:
                fh.write("\n")
            fh.write(text + "\n")
            fh.flush()
            needs_separator = True
            written += 1

    LOGGER.info("Wrote %s references to %s", written, output)
    return written
