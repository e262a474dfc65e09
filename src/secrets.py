"""Utilities for loading local (gitignored) GitHub credentials."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_SECRETS_FILENAME = "local_secrets.json"
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GITHUB_PERSONAL_ACCESS_TOKEN")


def _default_secrets_path() -> Path:
    root = Path(__file__).resolve().parents[1]
    return root / DEFAULT_SECRETS_FILENAME


def load_local_secrets(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Load secrets from a JSON file; return {} when missing or unreadable."""

    candidate = path or os.getenv("LOCAL_SECRETS_FILE") or _default_secrets_path()
    secrets_path = Path(candidate).expanduser()
    if not secrets_path.exists():
        return {}
    try:
        with secrets_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        print(f"[warn] ignoring unreadable secrets file {secrets_path}: {exc}")
        return {}
    return data if isinstance(data, dict) else {}


def load_github_tokens(secrets: Optional[Dict[str, Any]] = None) -> List[str]:
    """Return personal access tokens from the secrets file, then the environment.

    Tokens listed under ``github_tokens`` come first; ``GITHUB_TOKEN`` and
    ``GITHUB_PERSONAL_ACCESS_TOKEN`` are appended when set and not duplicates.
    """

    secrets = load_local_secrets() if secrets is None else secrets
    raw = secrets.get("github_tokens") or []
    if isinstance(raw, str):
        raw = [raw]
    tokens = [str(token).strip() for token in raw if token and str(token).strip()]
    for name in TOKEN_ENV_VARS:
        value = (os.getenv(name) or "").strip()
        if value and value not in tokens:
            tokens.append(value)
    return tokens


__all__ = ["load_local_secrets", "load_github_tokens", "DEFAULT_SECRETS_FILENAME"]
