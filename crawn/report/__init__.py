# File: crawn/report/__init__.py
"""crawn.report: NDJSON encoding and the output sink used by the crawler and the CLI."""

from __future__ import annotations

from crawn.report.ndjson_report import NdjsonWriter, encode_record

__all__ = ["NdjsonWriter", "encode_record"]
