"""Public repository listing for the projects page"""

from typing import Any

import requests

from folio.errors import TransientUpstreamFailure


GITHUB_API = "https://api.github.com"


def get_repos(username: str, session: requests.Session = None) -> list[dict[str, Any]]:
    """Most recently pushed public repos of username (first page of 30)."""
    http = session or requests
    try:
        res = http.get(
            f"{GITHUB_API}/users/{username}/repos",
            params={"per_page": 30, "sort": "pushed"},
            headers={"Accept": "application/vnd.github+json"},
        )
        res.raise_for_status()
        return res.json()
    except (requests.RequestException, ValueError) as e:
        raise TransientUpstreamFailure(f"Failed to fetch repos for {username}: {e}") from e


def select_repos(repos: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop forks and order by stargazer count, most starred first."""
    own = [r for r in repos if not r.get("fork")]
    return sorted(own, key=lambda r: r.get("stargazers_count") or 0, reverse=True)
