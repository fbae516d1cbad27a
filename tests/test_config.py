"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from clonepick.config import (
    CONFIG_TEMPLATE,
    Paths,
    ProviderConfig,
    ProviderKind,
    load_config,
    parse_config,
)
from clonepick.errors import FirstRun, InvalidConfiguration


def _write(tmp_path, data) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


def test_first_run_writes_template(tmp_path):
    config_path = tmp_path / "nested" / "config.yaml"

    with pytest.raises(FirstRun) as exc_info:
        load_config(config_path)

    assert config_path.read_text() == CONFIG_TEMPLATE
    assert exc_info.value.config_path == config_path
    assert str(config_path) in str(exc_info.value)


def test_template_is_a_valid_config(monkeypatch):
    monkeypatch.setenv("BITBUCKET_TOKEN", "from-env")

    configs = parse_config(yaml.safe_load(CONFIG_TEMPLATE))

    assert [c.kind for c in configs] == [ProviderKind.GITHUB, ProviderKind.BITBUCKET]
    assert configs[1].token == "from-env"


def test_load_config(tmp_path):
    path = _write(tmp_path, {"providers": [
        {"provider": "github", "base_url": "https://git.acme.org/", "token": "s3cr3t", "symbol": "GH"},
        {"provider": "Bitbucket", "base_url": "https://bb.acme.org", "token": "t0ken"},
    ]})

    assert load_config(path) == [
        ProviderConfig(ProviderKind.GITHUB, "https://git.acme.org", "s3cr3t", "GH"),
        ProviderConfig(ProviderKind.BITBUCKET, "https://bb.acme.org", "t0ken", None),
    ]


@pytest.mark.parametrize("data", [None, {}, {"providers": []}])
def test_empty_config_counts_as_first_run(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text("" if data is None else yaml.safe_dump(data))

    with pytest.raises(FirstRun):
        load_config(path)


@pytest.mark.parametrize(
    "entry, message",
    [
        ({"provider": "gitlab", "base_url": "https://x", "token": "t"}, "invalid provider 'gitlab'"),
        ({"provider": "github", "token": "t"}, "missing 'base_url'"),
        ({"provider": "github", "base_url": "https://x"}, "missing 'token'"),
        ({"provider": "github", "base_url": "https://x", "token_env": "CLONEPICK_TEST_UNSET"}, "CLONEPICK_TEST_UNSET"),
        ("github", "must be a mapping"),
    ],
)
def test_invalid_entries(entry, message, monkeypatch):
    monkeypatch.delenv("CLONEPICK_TEST_UNSET", raising=False)

    with pytest.raises(InvalidConfiguration) as exc_info:
        parse_config({"providers": [entry]})

    assert message in str(exc_info.value)


@pytest.mark.parametrize("name", ["../../escaped", "team/gh", "a\\b", ".hidden", ".."])
def test_name_must_be_a_plain_file_name(name):
    entry = {"provider": "github", "base_url": "https://x", "token": "t", "name": name}

    with pytest.raises(InvalidConfiguration) as exc_info:
        parse_config({"providers": [entry]})

    assert f"invalid name '{name}'" in str(exc_info.value)


def test_plain_name_is_kept():
    entry = {"provider": "github", "base_url": "https://x", "token": "t", "name": "work-gh"}

    (config,) = parse_config({"providers": [entry]})

    assert config.name == "work-gh"


def test_invalid_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("providers: [unclosed")

    with pytest.raises(InvalidConfiguration):
        load_config(path)


def test_default_paths_honour_environment(monkeypatch, tmp_path):
    monkeypatch.delenv("CLONEPICK_CONFIG_DIR", raising=False)
    monkeypatch.delenv("CLONEPICK_CACHE_DIR", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "conf"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))

    paths = Paths.default()
    assert paths.config_file == tmp_path / "conf" / "clonepick" / "config.yaml"
    assert paths.cache_dir == tmp_path / "cache" / "clonepick"

    monkeypatch.setenv("CLONEPICK_CACHE_DIR", str(tmp_path / "override"))
    assert Paths.default().cache_dir == tmp_path / "override"
