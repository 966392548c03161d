# memory_match/client.py
from __future__ import annotations
from typing import Dict, Optional

import requests


class MatchClient:
    """Thin JSON client for the memory match HTTP server."""

    def __init__(self, base_url: str = "http://127.0.0.1:5000", timeout: float = 2.0,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def health(self) -> Dict:
        return self._get("/health")

    def state(self) -> Dict:
        return self._get("/state")["board"]

    def board_text(self) -> str:
        r = self.session.get(f"{self.base_url}/board", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def pick(self, card: int) -> Dict:
        return self._post("/pick", {"card": card})["board"]

    def reset(self) -> Dict:
        return self._post("/reset", {})["board"]

    def _get(self, path: str) -> Dict:
        r = self.session.get(f"{self.base_url}{path}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def _post(self, path: str, body: Dict) -> Dict:
        r = self.session.post(f"{self.base_url}{path}", json=body, timeout=self.timeout)
        r.raise_for_status()
        return r.json()
