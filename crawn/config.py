# === FILE: crawn/config.py ===
"""
Загрузка и валидация конфигурации краулера crawn.
Схема описана через Pydantic; значения можно взять из YAML/JSON-файла
и переопределить аргументами командной строки.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

from crawn import __version__

OUTPUT_SUFFIX = ".ndjson"


class CrawlConfig(BaseModel):
    """Configuration for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="Crawl root; defines domain scope and base keywords.")
    output: Path = Field(..., description="NDJSON destination file.")
    max_depth: int = Field(4, ge=0, description="BFS level ceiling, 0 = seed page only.")
    verbose: bool = Field(False, description="Log every outgoing request at INFO.")
    include_text: bool = Field(False, description="Add extracted visible text to each record.")
    include_content: bool = Field(False, description="Add raw HTML to each record.")
    log_file: Optional[Path] = Field(None, description="Secondary log destination.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    rate_interval: float = Field(0.25, gt=0, description="Minimum seconds between two requests.")
    rate_jitter: float = Field(0.0, ge=0, description="Random extra spacing added to each interval (seconds).")
    concurrency: int = Field(4, ge=1, le=64, description="Number of concurrent workers.")
    batch_size: int = Field(1, ge=1, description="Targets a worker takes from the frontier at once.")
    user_agent: str = Field(f"crawn/{__version__}", min_length=1, description="User-Agent header.")

    @field_validator("seed_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("output")
    def _check_output_suffix(cls, v: Path) -> Path:
        if v.suffix.lower() != OUTPUT_SUFFIX:
            raise ValueError(f"output file extension must be {OUTPUT_SUFFIX}, got {v.suffix or 'none'!r}")
        return v

    @property
    def seed(self) -> str:
        return str(self.seed_url)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON config file into a plain mapping (not validated yet)."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Build a validated CrawlConfig.

    Values from the optional YAML/JSON file at *path* come first; every
    override that is not ``None`` replaces them. Raises FileNotFoundError,
    ValueError/TypeError for unreadable files and ValidationError for
    schema violations.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})

    return CrawlConfig(**data)
