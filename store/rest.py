"""
REST client for the hosted database service (PostgREST-style API).
"""

import logging
from typing import List, Dict, Any, Optional

import requests

from config import store_config
from .base import DataStore, StoreError

logger = logging.getLogger(__name__)


class RestStore(DataStore):
    """Client for reading and updating dashboard tables over HTTP."""

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.url = (url or store_config.url or "").rstrip("/")
        self.api_key = api_key if api_key is not None else store_config.api_key
        self.timeout = timeout or store_config.timeout_seconds

        if not self.url:
            raise ValueError("A database service URL is required")

        self.session = requests.Session()
        self.session.headers.update({
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        })

    def _endpoint(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    def fetch(self, table: str) -> List[Dict[str, Any]]:
        response = self._request("GET", table, params={"select": "*"})
        return response.json()

    def update(self, table: str, fields: Dict[str, Any], record_id: str) -> Dict[str, Any]:
        response = self._request(
            "PATCH",
            table,
            record_id=record_id,
            params={"id": f"eq.{record_id}"},
            json=fields,
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            raise StoreError(f"No row with id {record_id} in {table}", table=table, record_id=record_id)
        return rows[0]

    def _request(self, method: str, table: str, record_id: str = "", **kwargs) -> requests.Response:
        try:
            response = self.session.request(
                method, self._endpoint(table), timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"{method} {table} failed: {e}")
            raise StoreError(str(e), table=table, record_id=record_id) from e

        return response
