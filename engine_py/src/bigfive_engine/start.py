#!/usr/bin/env python3
"""Run the Big Five game server under uvicorn."""

import logging
import os
from typing import Any, Dict, Mapping, Optional

import uvicorn

logger = logging.getLogger(__name__)

APP_PATH = "bigfive_engine.ws.server:app"
TRUE_VALUES = ("1", "true", "yes", "on")


def server_settings(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Read uvicorn settings from the environment.

    HOST and PORT pick the bind address, RELOAD turns on auto-reload and
    LOG_LEVEL is passed through to uvicorn in lower case.
    """
    env = os.environ if env is None else env
    try:
        port = int(env.get("PORT", "8000"))
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {env.get('PORT')!r}")

    return {
        "host": env.get("HOST", "0.0.0.0"),
        "port": port,
        "reload": env.get("RELOAD", "false").strip().lower() in TRUE_VALUES,
        "log_level": env.get("LOG_LEVEL", "info").strip().lower(),
    }


def main():
    settings = server_settings()
    logging.basicConfig(level=getattr(logging, settings["log_level"].upper(), logging.INFO))
    logger.info(
        f"Big Five server on {settings['host']}:{settings['port']} "
        f"(health at /health, websocket at /ws)"
    )
    uvicorn.run(APP_PATH, **settings)


if __name__ == "__main__":
    main()
