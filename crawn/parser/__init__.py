"""crawn.parser: HTML parsing helpers."""
