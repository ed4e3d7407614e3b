# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_crawler.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("concurrency: 4\nretry_delay: 0.5", None),
        (json.dumps({"concurrency": 4, "retry_delay": 0.5}), None),
        (json.dumps({"concurrency": 0}), ValidationError),
        ("bogus_field: 1", ValidationError),
        ("not: a: mapping", ValueError),
        ("- just\n- a list", TypeError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.concurrency == 4
        assert cfg.retry_delay == 0.5
        assert cfg.retry_attempts == 3


def test_defaults():
    cfg = CrawlerConfig()
    assert cfg.concurrency == 2
    assert cfg.runners == 5
    assert cfg.retry_attempts == 3
    assert cfg.retry_delay == 5.0
    assert cfg.output_dir == Path("pages")


def test_load_config_without_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_uses_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("runners: 2\n", encoding="utf-8")
    assert load_config(None).runners == 2


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "concurrency = 2", ".toml"))


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        CrawlerConfig().concurrency = 9
