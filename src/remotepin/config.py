"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from remotepin.models.config import ClientConfig

DEFAULT_CONFIG_PATH = "~/.remotepin/config.toml"


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "REMOTEPIN_",
) -> ClientConfig:
    """Load client configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (REMOTEPIN_SERVICE, etc.)
        2. TOML config file
        3. Defaults from ClientConfig
    """
    raw: dict = {}
    p = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
    if p.exists():
        with open(p, "rb") as f:
            raw = tomllib.load(f)

    cfg = ClientConfig()

    # ── Client section ─────────────────────────────────────
    client = raw.get("client", {})
    if v := client.get("log_level"):
        cfg.log_level = str(v)

    # ── Repo section ───────────────────────────────────────
    repo = raw.get("repo", {})
    if v := repo.get("path"):
        cfg.repo_path = str(v)

    # ── IPFS section ───────────────────────────────────────
    ipfs = raw.get("ipfs", {})
    if v := ipfs.get("kubo_rpc_url"):
        cfg.kubo_rpc_url = str(v)
    if v := ipfs.get("timeout"):
        cfg.kubo_timeout = int(v)

    # ── Remote section ─────────────────────────────────────
    remote = raw.get("remote", {})
    if v := remote.get("default_service"):
        cfg.default_service = str(v)
    if v := remote.get("poll_interval"):
        cfg.poll_interval = float(v)
    if v := remote.get("request_timeout"):
        cfg.request_timeout = int(v)
    if v := remote.get("page_size"):
        cfg.page_size = int(v)

    # ── Environment variable overrides (highest priority) ──
    if level := os.environ.get(f"{env_prefix}LOG_LEVEL"):
        cfg.log_level = level
    if repo_env := os.environ.get(f"{env_prefix}REPO"):
        cfg.repo_path = repo_env
    if kubo := os.environ.get(f"{env_prefix}KUBO_RPC_URL"):
        cfg.kubo_rpc_url = kubo
    if service := os.environ.get(f"{env_prefix}SERVICE"):
        cfg.default_service = service

    # Expand ~ in paths
    cfg.repo_path = str(Path(cfg.repo_path).expanduser())

    return cfg
