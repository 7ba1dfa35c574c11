"""Configuration model for the remotepin client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ClientConfig:
    """Complete client configuration."""

    # Client
    log_level: str = "info"

    # Local repository holding the service registry
    repo_path: str = "~/.remotepin"

    # IPFS
    kubo_rpc_url: str = "http://127.0.0.1:5001"
    kubo_timeout: int = 30  # seconds

    # Remote pinning service
    default_service: str = ""
    poll_interval: float = 0.5  # seconds between status checks in --no-background
    request_timeout: int = 60  # seconds per HTTP request
    page_size: int = 1000  # results per GET /pins page (API maximum)
