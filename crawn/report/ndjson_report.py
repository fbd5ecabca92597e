# crawn/report/ndjson_report.py

"""
NDJSON output for crawn: one JSON object per line, UTF-8, newline-terminated.

Example:
```python
from crawn.report.ndjson_report import NdjsonWriter

async with NdjsonWriter("pages.ndjson") as sink:
    await sink.write(result)
```
"""
from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO, Union

from crawn.crawler.models import PageResult
from crawn.errors import OutputError
from crawn.logger import logger


def encode_record(record: Mapping[str, Any]) -> str:
    """Serialize *record* as one NDJSON line (trailing newline included)."""
    return json.dumps(record, ensure_ascii=False) + "\n"


class NdjsonWriter:
    """Append-only, single-writer-at-a-time sink for PageResults."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.lines_written = 0
        self._fh: Optional[TextIO] = None
        self._lock = asyncio.Lock()

    def open(self) -> NdjsonWriter:
        """Create parent directories and truncate/create the output file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self.path.open("w", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise OutputError(f"Failed to open output file: {self.path}") from exc
        logger.debug("Writing NDJSON to %s", self.path)
        return self

    def close(self) -> None:
        if self._fh is not None and not self._fh.closed:
            self._fh.close()
        self._fh = None

    async def write(self, result: PageResult) -> None:
        """Encode *result* and append it as one flushed line."""
        line = encode_record(result.to_record())
        async with self._lock:
            if self._fh is None:
                raise OutputError(f"Output file is not open: {self.path}")
            try:
                self._fh.write(line)
                self._fh.flush()
            except OSError as exc:
                raise OutputError(f"Failed to write output entry for URL: {result.url}") from exc
            self.lines_written += 1

    async def __aenter__(self) -> NdjsonWriter:
        return self.open()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
