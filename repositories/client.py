"""
Emerald connection configuration.

This module contains *only* the lookup service connection setup: the base URL,
the request timeout and a shared `requests.Session` for the repository modules
to use.

Environment variables:
- EMERALD_URL: Base URL of the Emerald lookup service (required before first use)
- EMERALD_TIMEOUT: Request timeout in seconds (default: 10)

The base URL is read once, when the session is first created, and is fixed for
the rest of the process. Call `configure()` before first use to set it in code
instead of the environment.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import requests
from dotenv import load_dotenv

# Load environment variables from .env file in the project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DEFAULT_TIMEOUT_SECONDS = 10.0

_url: Optional[str] = None
_timeout: Optional[float] = None
_session: Optional[requests.Session] = None


def configure(url: str, timeout: Optional[float] = None) -> None:
    """
    Set the Emerald base URL (and optionally the timeout) explicitly.

    Raises:
        RuntimeError: If the connection is already in use
    """

    global _url, _timeout
    if _session is not None:
        raise RuntimeError("Emerald connection already in use; configure() must be called first")
    _url = url.rstrip("/")
    if timeout is not None:
        _timeout = timeout


def get_url() -> str:
    """
    Return the configured base URL.

    Raises:
        RuntimeError: If neither configure() nor EMERALD_URL provided one
    """

    global _url
    if _url is None:
        env_url = os.getenv("EMERALD_URL")
        if not env_url:
            raise RuntimeError(
                "You need to set EMERALD_URL before using this library! "
                "Set EMERALD_URL to the base URL of the Emerald service."
            )
        _url = env_url.rstrip("/")
    return _url


def get_timeout() -> float:
    global _timeout
    if _timeout is None:
        _timeout = float(os.getenv("EMERALD_TIMEOUT", DEFAULT_TIMEOUT_SECONDS))
    return _timeout


def build_session() -> requests.Session:
    """New HTTP session with the Emerald request headers; needs no base URL."""

    session = requests.Session()
    session.headers.update({
        "User-Agent": "emerald-purchase/1.0",
        "Accept": "application/json",
    })
    return session


def get_session() -> requests.Session:
    """Shared HTTP session for the configured base URL; created on first use."""

    global _session
    if _session is None:
        get_url()
        _session = build_session()
    return _session


def reset() -> None:
    """
    Close the shared session and forget the configuration.

    The next use reads EMERALD_URL and EMERALD_TIMEOUT again, or picks up a
    new configure() call. Repositories already built keep their session.
    """

    global _url, _timeout, _session
    if _session is not None:
        _session.close()
    _url = None
    _timeout = None
    _session = None


__all__ = ["configure", "get_url", "get_timeout", "build_session", "get_session", "reset"]
