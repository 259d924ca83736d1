"""Helper for running the campmeals ASGI application."""

from __future__ import annotations

import os

import uvicorn


def _parse_port(value: str | None) -> int:
    if not value:
        return 8000
    try:
        port = int(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid CAMPMEALS_SERVER_PORT '{value}': {exc}") from exc
    if not 0 < port < 65536:
        raise SystemExit("CAMPMEALS_SERVER_PORT must be between 1 and 65535.")
    return port


def main() -> None:
    """Entry point used by the `campmeals-server` script."""

    host = os.environ.get("CAMPMEALS_SERVER_HOST", "127.0.0.1")
    port = _parse_port(os.environ.get("CAMPMEALS_SERVER_PORT"))
    reload_enabled = os.environ.get("RELOAD") == "1"

    uvicorn.run(
        "campmeals.server.app:app",
        host=host,
        port=port,
        reload=reload_enabled,
    )


if __name__ == "__main__":
    main()
