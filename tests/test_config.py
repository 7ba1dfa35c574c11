"""Config loading: defaults, TOML file, environment overrides."""

from __future__ import annotations

from remotepin.config import load_config

TOML = """
[client]
log_level = "warning"

[repo]
path = "/srv/remotepin"

[ipfs]
kubo_rpc_url = "http://10.0.0.5:5001"
timeout = 12

[remote]
default_service = "pinbox"
poll_interval = 2.5
request_timeout = 90
page_size = 250
"""


def test_defaults_when_file_missing(tmp_path, monkeypatch):
    for var in ("REMOTEPIN_LOG_LEVEL", "REMOTEPIN_REPO", "REMOTEPIN_KUBO_RPC_URL", "REMOTEPIN_SERVICE"):
        monkeypatch.delenv(var, raising=False)

    cfg = load_config(tmp_path / "absent.toml")

    assert cfg.kubo_rpc_url == "http://127.0.0.1:5001"
    assert cfg.poll_interval == 0.5
    assert cfg.default_service == ""
    assert cfg.repo_path.endswith(".remotepin")
    assert "~" not in cfg.repo_path


def test_toml_values(tmp_path, monkeypatch):
    for var in ("REMOTEPIN_LOG_LEVEL", "REMOTEPIN_REPO", "REMOTEPIN_KUBO_RPC_URL", "REMOTEPIN_SERVICE"):
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / "config.toml"
    path.write_text(TOML)

    cfg = load_config(path)

    assert cfg.log_level == "warning"
    assert cfg.repo_path == "/srv/remotepin"
    assert cfg.kubo_rpc_url == "http://10.0.0.5:5001"
    assert cfg.kubo_timeout == 12
    assert cfg.default_service == "pinbox"
    assert cfg.poll_interval == 2.5
    assert cfg.request_timeout == 90
    assert cfg.page_size == 250


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "config.toml"
    path.write_text(TOML)
    monkeypatch.setenv("REMOTEPIN_SERVICE", "backup")
    monkeypatch.setenv("REMOTEPIN_REPO", str(tmp_path / "repo"))
    monkeypatch.setenv("REMOTEPIN_KUBO_RPC_URL", "http://kubo:5001")

    cfg = load_config(path)

    assert cfg.default_service == "backup"
    assert cfg.repo_path == str(tmp_path / "repo")
    assert cfg.kubo_rpc_url == "http://kubo:5001"
