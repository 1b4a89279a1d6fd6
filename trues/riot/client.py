# riot/client.py

import logging
import time
from collections import deque
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

# Platform → regional routing for /match-v5 and /account-v1
REGION_GROUPS = {
    "euw1": "europe", "eun1": "europe", "ru": "europe", "tr1": "europe",
    "kr": "asia",   "jp1": "asia",
    "na1": "americas", "br1": "americas", "la1": "americas", "la2": "americas"
}

log = logging.getLogger(__name__)


class RiotAPIError(Exception):
    """Base exception for Riot API errors."""
    pass


class RateLimitError(RiotAPIError):
    """Raised when rate limit is exceeded and retry fails."""
    pass


class _ServerError(RiotAPIError):
    """5xx answer, retried before it surfaces as RiotAPIError."""
    pass


class RiotClient:
    """Blocking Riot API client with built-in rate limiting and error handling."""

    def __init__(self, api_key: str, timeout: float = 10):
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[requests.Session] = None

        # Timestamps of the last requests, for throttling
        self._req_times: deque = deque()
        # Riot dev quota: 100 requests / 120 s
        self._quota_window = 120    # seconds
        self._quota_max = 100       # max requests per window

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"X-Riot-Token": self.api_key})
        return self._session

    def close(self):
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _throttle(self):
        """Block until another request fits into the quota window."""
        now = time.time()

        while self._req_times and self._req_times[0] <= now - self._quota_window:
            self._req_times.popleft()

        if len(self._req_times) >= self._quota_max:
            # Wait until the oldest request leaves the window
            wait = self._quota_window - (now - self._req_times[0])
            log.warning(f"Rate limit reached, waiting {wait:.1f}s")
            time.sleep(wait)

        self._req_times.append(time.time())

    @retry(
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout, _ServerError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    def _send(self, url: str, params: Optional[Dict[str, Any]]) -> requests.Response:
        resp = self._get_session().get(url, params=params, timeout=self.timeout)
        if resp.status_code >= 500:
            log.warning(f"Server error {resp.status_code} for {url}")
            raise _ServerError(f"API error {resp.status_code}")
        return resp

    def _request(self, url: str, params: Optional[Dict[str, Any]] = None,
                 max_retries: int = 3) -> Any:
        """
        Make an HTTP request with retry logic.

        Args:
            url: The full URL to request
            params: Query parameters (None values are dropped)
            max_retries: Maximum number of retries for 429 responses

        Returns:
            JSON response from the API, None on 404

        Raises:
            RateLimitError: When rate limit is exceeded after retries
            RiotAPIError: For other API errors
            requests.RequestException: For network errors after retries
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        for attempt in range(max_retries):
            self._throttle()
            try:
                resp = self._send(url, params)
            except _ServerError as e:
                raise RiotAPIError(str(e)) from e

            if resp.status_code == 429:
                retry_after = int(resp.headers.get("Retry-After", "1")) + 1
                if attempt < max_retries - 1:
                    log.warning(f"429 Rate limited, retrying after {retry_after}s (attempt {attempt + 1}/{max_retries})")
                    time.sleep(retry_after)
                    continue
                raise RateLimitError(f"Rate limit exceeded after {max_retries} attempts")

            if resp.status_code == 404:
                log.debug(f"404 Not Found: {url}")
                return None

            if resp.status_code >= 400:
                raise RiotAPIError(f"API error {resp.status_code}: {resp.text[:200]}")
            return resp.json()

        raise RiotAPIError(f"Failed after {max_retries} attempts")

    @staticmethod
    def _group(region: str) -> str:
        return REGION_GROUPS.get(region.lower(), "americas")

    # ───────────────────────────── account-v1 ──────────────────────────
    def get_account_by_puuid(self, region: str, puuid: str) -> Optional[Dict[str, Any]]:
        url = f"https://{self._group(region)}.api.riotgames.com/riot/account/v1/accounts/by-puuid/{puuid}"
        return self._request(url)

    def get_account_by_name_tag(self, region: str, game_name: str, tag_line: str) -> Optional[Dict[str, Any]]:
        """
        Get account by Riot ID (game name + tag).
        Routed via region group (americas/europe/asia).
        """
        url = (
            f"https://{self._group(region)}.api.riotgames.com"
            f"/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )
        return self._request(url)

    # ───────────────────────────── summoner-v4 ─────────────────────────
    def get_summoner_by_name(self, region: str, summoner_name: str) -> Optional[Dict[str, Any]]:
        """Get summoner information by summoner name."""
        name_enc = quote(summoner_name, safe="")
        url = f"https://{region}.api.riotgames.com/lol/summoner/v4/summoners/by-name/{name_enc}"
        return self._request(url)

    def get_summoner_by_puuid(self, region: str, puuid: str) -> Optional[Dict[str, Any]]:
        """Get summoner information by PUUID."""
        url = f"https://{region}.api.riotgames.com/lol/summoner/v4/summoners/by-puuid/{puuid}"
        return self._request(url)

    # ───────────────────────────── match-v5 ────────────────────────────
    def get_match_ids(self, region: str, puuid: str, count: int = 100, start: int = 0,
                      queue: Optional[int] = None, match_type: Optional[str] = None,
                      start_time: Optional[int] = None, end_time: Optional[int] = None) -> List[str]:
        """Get a page of match IDs for a player."""
        url = f"https://{self._group(region)}.api.riotgames.com/lol/match/v5/matches/by-puuid/{puuid}/ids"
        result = self._request(url, params={
            "start": start, "count": count, "queue": queue, "type": match_type,
            "startTime": start_time, "endTime": end_time,
        })
        return result if result is not None else []

    # ───────────────────────────── league / mastery ────────────────────
    def get_league_entries_by_puuid(self, region: str, puuid: str) -> List[Dict[str, Any]]:
        """Get ranked league entries by PUUID."""
        url = f"https://{region}.api.riotgames.com/lol/league/v4/entries/by-puuid/{puuid}"
        result = self._request(url)
        return result if result is not None else []

    def get_champion_masteries_by_puuid(self, region: str, puuid: str) -> List[Dict[str, Any]]:
        url = f"https://{region}.api.riotgames.com/lol/champion-mastery/v4/champion-masteries/by-puuid/{puuid}"
        result = self._request(url)
        return result if result is not None else []
