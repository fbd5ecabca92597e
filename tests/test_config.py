# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from crawn.config import CrawlConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("seed_url: http://example.com\noutput: out.ndjson", ".yaml", None),
        (json.dumps({"seed_url": "http://example.com", "output": "out.ndjson"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken json", ".json", ValueError),
        ("seed_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlConfig)
        assert cfg.seed.rstrip("/") == "http://example.com"


def test_defaults(tmp_path):
    cfg = CrawlConfig(seed_url="https://example.com", output=tmp_path / "o.ndjson")
    assert cfg.max_depth == 4
    assert not cfg.verbose and not cfg.include_text and not cfg.include_content
    assert cfg.log_file is None
    assert 0.1 <= cfg.rate_interval <= 0.5
    assert 10 <= cfg.timeout <= 30
    assert 1 <= cfg.concurrency <= 8
    assert cfg.user_agent.startswith("crawn/")


def test_overrides_win_over_file(config_files):
    cfg = load_config(config_files["yaml"], max_depth=1, verbose=True, concurrency=None)
    assert cfg.max_depth == 1
    assert cfg.verbose
    assert cfg.concurrency == 4
    assert cfg.seed == "https://example.com/docs"


def test_yaml_and_json_agree(config_files):
    assert load_config(config_files["yaml"]) == load_config(config_files["json"])


def test_overrides_without_file(tmp_path):
    cfg = load_config(None, seed_url="http://example.com/a", output=tmp_path / "x.ndjson", include_text=True)
    assert cfg.include_text
    assert cfg.output == tmp_path / "x.ndjson"


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    "changes",
    [
        {"seed_url": "not a url"},
        {"seed_url": "ftp://example.com"},
        {"output": "pages.json"},
        {"max_depth": -1},
        {"rate_interval": 0},
        {"concurrency": 0},
        {"timeout": 0},
        {"unknown_option": 1},
    ],
)
def test_invalid_values(tmp_path, changes):
    data = {"seed_url": "http://example.com", "output": str(tmp_path / "o.ndjson")}
    data.update(changes)
    with pytest.raises(ValidationError):
        CrawlConfig(**data)


def test_config_is_frozen(tmp_path):
    cfg = CrawlConfig(seed_url="http://example.com", output=tmp_path / "o.ndjson")
    with pytest.raises(ValidationError):
        cfg.max_depth = 10
