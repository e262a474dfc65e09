"""GraphQL transport with retry, backoff, and token rotation for GitHub."""

from __future__ import annotations

import os
import threading
import time
from typing import Any, Dict, Optional, Tuple

import requests

from .config import (
    BACKOFF_BASE_SEC,
    GITHUB_TOKENS,
    GRAPHQL_URL,
    MAX_RETRIES,
    MAX_WAIT_ON_403,
    RATE_LIMIT_TOKEN_RESET_WAIT_SEC,
    REQUEST_TIMEOUT,
    USER_AGENT,
)

TERMINAL_STATUSES = {400, 404, 410, 422}

GITHUB_TOKEN_INDEX = 0
_TOKEN_LOCK = threading.Lock()


class GraphQLError(RuntimeError):
    """GitHub answered, but the query cannot succeed by retrying."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


def sleep_with_jitter(base: float) -> None:
    """Pause execution with +/- 25% jitter to avoid synchronized retries."""
    jitter = base * 0.25 * (0.5 - (os.urandom(1)[0] / 255.0))
    time.sleep(max(0.0, base + jitter))


def sleep_on_rate_limit(reason: str) -> None:
    """Sleep for the configured interval when every token is still rate limited."""
    wait_sec = max(0, RATE_LIMIT_TOKEN_RESET_WAIT_SEC)
    if wait_sec <= 0:
        return
    print(f"[rate-limit] {reason}; sleeping {wait_sec}s")
    time.sleep(wait_sec)
    print("  done sleeping, resuming retrieval run...")


def describe_http_error(resp: requests.Response) -> str:
    """Return GitHub's error message, falling back to a slice of the body."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {"text": str(body)[:300]}
    return str(body.get("message") or body.get("error") or body.get("text") or "")


def log_http_error(resp: requests.Response, url: str) -> None:
    """Print a short, human-readable message when GitHub returns an error."""
    print(f"[error] HTTP {resp.status_code} for {url}\n  -> {describe_http_error(resp)}")


def current_token() -> Tuple[int, Optional[str]]:
    """Return the active token index and its token (None when none are configured)."""
    with _TOKEN_LOCK:
        index = GITHUB_TOKEN_INDEX
    if not GITHUB_TOKENS:
        return index, None
    return index, GITHUB_TOKENS[index % len(GITHUB_TOKENS)] or None


def get_current_token() -> Optional[str]:
    """Return the token for the current index or None when none are configured."""
    return current_token()[1]


def switch_to_next_token(used_index: Optional[int] = None) -> bool:
    """Advance to the next token if there is more than one; return True if switched.

    Fetch workers share the index. Passing the index a failed request was sent
    with makes rotation relative to that token: when another worker has already
    moved past it, the index is left alone.
    """
    global GITHUB_TOKEN_INDEX
    if len(GITHUB_TOKENS) <= 1:
        return False

    with _TOKEN_LOCK:
        if used_index is not None and GITHUB_TOKEN_INDEX != used_index:
            return True
        GITHUB_TOKEN_INDEX = (GITHUB_TOKEN_INDEX + 1) % len(GITHUB_TOKENS)
        index = GITHUB_TOKEN_INDEX
    if index == 0:
        print(f"[rate-limit] wrapped to token 1/{len(GITHUB_TOKENS)}")
    else:
        print(f"[rate-limit] switched to token {index + 1}/{len(GITHUB_TOKENS)}")
    return True


def graphql_headers(token: Optional[str] = None) -> Dict[str, str]:
    """Build headers for GraphQL requests, attaching `token` or the active PAT."""
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
        "Content-Type": "application/json",
    }
    token = token or get_current_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def backoff_delay(attempt: int) -> float:
    return BACKOFF_BASE_SEC * (2 ** (attempt - 1))


def rate_limit_hint(resp: requests.Response, attempt: int) -> Tuple[bool, float]:
    """Inspect a 403/429 response; return (quota exhausted, seconds to wait)."""
    headers = resp.headers or {}
    remaining = headers.get("X-RateLimit-Remaining")
    reset = headers.get("X-RateLimit-Reset")
    retry_after = headers.get("Retry-After")
    exhausted = remaining == "0" or bool(reset and str(reset).isdigit())

    if retry_after and str(retry_after).isdigit():
        wait_sec = float(retry_after)
    elif reset and str(reset).isdigit():
        wait_sec = float(max(0, int(reset) - int(time.time())) + 1)
    else:
        wait_sec = backoff_delay(attempt)
    return exhausted, min(wait_sec, MAX_WAIT_ON_403)


def _graphql_errors(payload: Dict[str, Any]) -> str:
    errors = payload.get("errors") or []
    messages = [str(err.get("message")) for err in errors if isinstance(err, dict)]
    return ", ".join(messages) or str(errors)


def run_graphql_query(query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
    """Execute a GraphQL query and return its ``data`` object.

    Network failures and 5xx responses are retried with exponential backoff.
    Rate-limited responses rotate through the configured tokens first and only
    sleep once every token has been tried. Terminal statuses, authentication
    failures with no token left to try, and GraphQL ``errors`` payloads raise
    :class:`GraphQLError`; exhausting the retry budget re-raises the last
    network exception or raises :class:`GraphQLError`.
    """
    payload = {"query": query, "variables": variables}
    last_exc: Optional[Exception] = None
    last_status: Optional[int] = None
    rotations = 0

    for attempt in range(1, MAX_RETRIES + 1):
        token_index, token = current_token()
        try:
            resp = requests.post(
                GRAPHQL_URL, json=payload, headers=graphql_headers(token), timeout=REQUEST_TIMEOUT
            )
        except requests.RequestException as exc:
            last_exc = exc
            delay = backoff_delay(attempt)
            print(f"[graphql retry {attempt}/{MAX_RETRIES}] {exc} -> sleep {delay:.1f}s")
            sleep_with_jitter(delay)
            continue

        last_status = resp.status_code
        if resp.status_code == 200:
            data = resp.json()
            if data.get("errors"):
                raise GraphQLError(f"GraphQL error: {_graphql_errors(data)}", status=200)
            return data.get("data") or {}

        if resp.status_code == 401:
            if rotations < len(GITHUB_TOKENS) - 1 and switch_to_next_token(token_index):
                rotations += 1
                continue
            log_http_error(resp, GRAPHQL_URL)
            raise GraphQLError(f"GitHub rejected credentials: {describe_http_error(resp)}", status=401)

        if resp.status_code in (403, 429):
            exhausted, wait_sec = rate_limit_hint(resp, attempt)
            if exhausted:
                if rotations < len(GITHUB_TOKENS) - 1 and switch_to_next_token(token_index):
                    rotations += 1
                    continue
                sleep_on_rate_limit("GraphQL rate limit persists across all configured tokens")
                rotations = 0
                continue
            print(f"[graphql backoff {resp.status_code}] waiting {wait_sec:.0f}s for {GRAPHQL_URL}")
            sleep_with_jitter(wait_sec)
            continue

        if resp.status_code in TERMINAL_STATUSES:
            log_http_error(resp, GRAPHQL_URL)
            raise GraphQLError(
                f"HTTP {resp.status_code}: {describe_http_error(resp)}", status=resp.status_code
            )

        if attempt < MAX_RETRIES:
            delay = backoff_delay(attempt)
            print(f"[graphql retry {attempt}/{MAX_RETRIES}] HTTP {resp.status_code} -> sleep {delay:.1f}s")
            sleep_with_jitter(delay)
            continue

        log_http_error(resp, GRAPHQL_URL)

    if last_exc and last_status is None:
        raise last_exc
    raise GraphQLError("GraphQL request failed after retries.", status=last_status)


__all__ = [
    "GraphQLError",
    "sleep_with_jitter",
    "sleep_on_rate_limit",
    "describe_http_error",
    "log_http_error",
    "get_current_token",
    "switch_to_next_token",
    "graphql_headers",
    "backoff_delay",
    "rate_limit_hint",
    "run_graphql_query",
]
