"""Minimal Notion API client for the merkle file fetcher."""

import os
from pathlib import Path
from typing import Any, Generator

import requests

from .config import DOWNLOAD_CHUNK_SIZE, NOTION_API_VERSION, NOTION_BASE_URL, REQUEST_TIMEOUT
from .models import DownloadError, NotionAPIError


class NotionClient:
    """Read-only access to Notion databases and data sources.

    Auth headers are attached to API calls only, never to file downloads:
    hosted file URLs are pre-signed and live on a different host.
    """

    def __init__(
        self,
        token: str,
        notion_version: str = NOTION_API_VERSION,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.token = token
        self.notion_version = notion_version
        self.session = session or requests.Session()
        self.timeout = timeout

    def __enter__(self) -> "NotionClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.session.close()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Notion-Version": self.notion_version,
            "Accept": "application/json",
        }

    def _call(self, operation: str, method: str, path: str, body: dict | None = None) -> dict:
        """Send one API request and decode the JSON response."""
        try:
            response = self.session.request(
                method,
                f"{NOTION_BASE_URL}{path}",
                headers=self._headers(),
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NotionAPIError(f"{operation} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NotionAPIError(
                f"{operation} failed: {response.status_code} {response.reason}: {response.text}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise NotionAPIError(f"{operation} failed: invalid JSON response: {e}") from e

    def retrieve_database(self, database_id: str) -> dict:
        return self._call("retrieve database", "GET", f"/databases/{database_id}")

    def first_data_source_id(self, database_id: str) -> str:
        """Return the id of the first data source under a database."""
        database = self.retrieve_database(database_id)
        data_sources = database.get("data_sources") or []
        if not data_sources or not data_sources[0].get("id"):
            raise NotionAPIError(f"database {database_id} has no data_sources")
        return data_sources[0]["id"]

    def query_data_source(self, data_source_id: str, body: dict[str, Any]) -> dict:
        return self._call(
            "query data source", "POST", f"/data_sources/{data_source_id}/query", body
        )

    def iter_pages(self, data_source_id: str, body: dict[str, Any]) -> Generator[dict, None, None]:
        """Yield every row of a query, following the pagination cursor."""
        page = 1
        while True:
            response = self.query_data_source(data_source_id, body)
            results = response.get("results") or []
            print(f"  Query page {page}: {len(results)} rows")
            yield from results

            next_cursor = response.get("next_cursor")
            if not response.get("has_more") or not next_cursor:
                break
            body = {**body, "start_cursor": next_cursor}
            page += 1

    def download(self, url: str, destination: Path) -> int:
        """Stream a file to destination via a temporary file.

        Returns the number of bytes written.
        """
        tmp_path = destination.with_name(destination.name + ".tmp")
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise DownloadError(
                        f"download failed: {response.status_code} {response.reason}: {response.text}"
                    )
                size = 0
                with open(tmp_path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            size += len(chunk)
        except requests.RequestException as e:
            tmp_path.unlink(missing_ok=True)
            raise DownloadError(f"download failed: {e}") from e
        except (DownloadError, OSError):
            tmp_path.unlink(missing_ok=True)
            raise

        if size == 0:
            tmp_path.unlink(missing_ok=True)
            raise DownloadError(f"downloaded file is empty: {destination}")
        os.replace(tmp_path, destination)
        return size
