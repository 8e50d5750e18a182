"""Tests for tfctl.yaml loading and namespaced lookups."""

import pytest

from tfctl import config
from tfctl.config import Config, load_yaml, resolve_config_path
from tfctl.errors import ConfigError


def _write(tmp_path, text, name="tfctl.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_namespaced_key_wins():
    cfg = Config(data={"color": True, "sq": {"color": False}}, namespace="sq")
    assert cfg.get("color") is False


def test_falls_back_to_global_key():
    cfg = Config(data={"color": True, "sq": {}}, namespace="sq")
    assert cfg.get("color") is True
    assert Config(data={"color": True}, namespace="wq").get("color") is True


def test_missing_key_returns_default():
    cfg = Config()
    assert cfg.get("color") is None
    assert cfg.get_bool("color", False) is False
    assert cfg.get_string("sort", "") == ""
    assert cfg.get_int("padding", 0) == 0


def test_nested_keys():
    cfg = Config(data={"colors": {"title": "red"}})
    assert cfg.get("colors.title") == "red"
    assert cfg.get("colors.missing") is None


def test_typed_getters_reject_wrong_types():
    cfg = Config(data={"color": "yes", "padding": "wide", "sort": 3})
    with pytest.raises(ConfigError):
        cfg.get_bool("color")
    with pytest.raises(ConfigError):
        cfg.get_int("padding")
    with pytest.raises(ConfigError):
        cfg.get_string("sort")


def test_get_int_rejects_bool():
    with pytest.raises(ConfigError):
        Config(data={"padding": True}).get_int("padding")


def test_resolve_explicit_path_first(tmp_path):
    explicit = tmp_path / "explicit.yaml"
    assert resolve_config_path(explicit) == explicit


def test_resolve_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("TFCTL_CONFIG", str(tmp_path / "env.yaml"))
    assert resolve_config_path() == tmp_path / "env.yaml"


def test_resolve_from_home(tmp_path, monkeypatch):
    monkeypatch.delenv("TFCTL_CONFIG")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("APPDATA", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert resolve_config_path() is None

    path = _write(tmp_path, "color: true\n")
    assert resolve_config_path() == path


def test_xdg_config_home_before_home(tmp_path, monkeypatch):
    monkeypatch.delenv("TFCTL_CONFIG")
    xdg = tmp_path / "xdg"
    home = tmp_path / "home"
    xdg.mkdir()
    home.mkdir()
    _write(home, "color: true\n")
    path = _write(xdg, "color: false\n")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    monkeypatch.setenv("HOME", str(home))
    assert resolve_config_path() == path


def test_load_yaml(tmp_path):
    path = _write(tmp_path, "color: true\nsq:\n  chop: true\n")
    assert load_yaml(path) == {"color": True, "sq": {"chop": True}}


def test_load_empty_yaml(tmp_path):
    assert load_yaml(_write(tmp_path, "")) == {}


def test_load_invalid_yaml(tmp_path):
    with pytest.raises(ConfigError):
        load_yaml(_write(tmp_path, "color: [unclosed\n"))


def test_load_non_mapping(tmp_path):
    with pytest.raises(ConfigError):
        load_yaml(_write(tmp_path, "- a\n- b\n"))


def test_missing_file_is_empty_config():
    cfg = config.use()
    assert cfg.data == {}
    assert config.require().get("color") is None


def test_use_caches(tmp_path):
    path = _write(tmp_path, "timezone: UTC\n")
    config.use(path)
    assert config.require().source == path
    assert config.get_string("timezone") == "UTC"


def test_set_namespace(tmp_path):
    config.use(_write(tmp_path, "output: yaml\nsq:\n  output: json\n"))
    config.set_namespace("sq")
    assert config.get_string("output") == "json"
    config.set_namespace("wq")
    assert config.get_string("output") == "yaml"


def test_timezone_from_config(tmp_path, monkeypatch):
    from tfctl.attrs import Attr

    monkeypatch.setenv("TZ", "UTC")
    config.use(_write(tmp_path, "timezone: America/New_York\n"))
    attr = Attr("attributes.created-at", "created-at", transform_spec="t")
    assert attr.transform("2024-01-15T10:30:00Z") == "2024-01-15T05:30:00EST"


def test_context_scope_sets_cached_namespace(tmp_path):
    from tfctl.context import TfctlContext

    ctx = TfctlContext()
    ctx.load(str(_write(tmp_path, "output: yaml\nwq:\n  output: json\n")))
    cfg = ctx.scoped("wq")
    assert cfg is config.require()
    assert cfg.namespace == "wq"
    assert config.get_string("output") == "json"
