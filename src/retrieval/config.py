"""Central configuration constants for GitHub GraphQL retrieval."""

from __future__ import annotations

import os
from typing import List

from src.secrets import load_github_tokens

GITHUB_TOKENS: List[str] = load_github_tokens()
USER_AGENT = "repo-metrics-report/1.0"
GRAPHQL_URL = os.getenv("GITHUB_GRAPHQL_URL", "https://api.github.com/graphql")
PAGE_SIZE = 100  # GraphQL connections cap `first` at 100
TIMELINE_PAGE_SIZE = int(os.getenv("TIMELINE_PAGE_SIZE", "100"))
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "90"))
MAX_RETRIES = max(6, len(GITHUB_TOKENS) * 2)
BACKOFF_BASE_SEC = 2
MAX_WAIT_ON_403 = int(os.getenv("MAX_WAIT_ON_403", "180"))
RATE_LIMIT_TOKEN_RESET_WAIT_SEC = int(
    os.getenv("RATE_LIMIT_TOKEN_RESET_WAIT_SEC", str(60 * 60))
)
MAX_PAGES = int(os.getenv("MAX_PAGES", "1000"))  # 0 = no cap

REPOS = [
    "usdot-jpo-ode/jpo-ode",
    "usdot-jpo-ode/jpo-cvdp",
    "usdot-jpo-ode/jpo-security-svcs",
    "usdot-jpo-ode/jpo-s3-deposit",
    "usdot-jpo-ode/jpo-sdw-depositor",
    # "usdot-jpo-ode/jpo-ode-documentation",
]

__all__ = [
    "GITHUB_TOKENS",
    "USER_AGENT",
    "GRAPHQL_URL",
    "PAGE_SIZE",
    "TIMELINE_PAGE_SIZE",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "BACKOFF_BASE_SEC",
    "MAX_WAIT_ON_403",
    "RATE_LIMIT_TOKEN_RESET_WAIT_SEC",
    "MAX_PAGES",
    "REPOS",
]
