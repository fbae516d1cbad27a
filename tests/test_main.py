"""Tests for the command line entry point."""

import pytest
import yaml

from clonepick.crawler.models import CloneUrl
from clonepick.main import main
from clonepick.store.cache import CacheStore


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.setenv("CLONEPICK_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("CLONEPICK_CONFIG_DIR", str(tmp_path / "config"))
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"providers": [
        {"provider": "github", "base_url": "https://git.acme.org", "token": "t", "symbol": "GH"},
        {"provider": "bitbucket", "base_url": "https://bb.acme.org", "token": "t"},
    ]}))
    return tmp_path, config_path


def test_list_prints_cached_urls(env, capsys):
    tmp_path, config_path = env
    cache = CacheStore(tmp_path / "cache")
    cache.save("github", [CloneUrl("git@git.acme.org:o/a.git"), CloneUrl("git@git.acme.org:o/b.git")])
    cache.save("bitbucket", [CloneUrl("ssh://git@bb.acme.org:7999/p/c.git")])

    assert main(["--list", "--config", str(config_path)]) == 0

    assert capsys.readouterr().out.splitlines() == [
        "GH | git@git.acme.org:o/a.git",
        "GH | git@git.acme.org:o/b.git",
        "ssh://git@bb.acme.org:7999/p/c.git",
    ]


def test_first_run_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.setenv("CLONEPICK_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("CLONEPICK_CONFIG_DIR", str(tmp_path / "config"))

    assert main(["--list"]) == 1
    assert (tmp_path / "config" / "config.yaml").exists()


def test_invalid_provider_exits_with_error(env):
    _, config_path = env
    config_path.write_text(yaml.safe_dump({"providers": [
        {"provider": "gitlab", "base_url": "https://gl", "token": "t"},
    ]}))

    assert main(["--list", "--config", str(config_path)]) == 1
