"""
Shared pytest fixtures.

Provides fake HTTP responses, a fake requests session and Notion row
builders for the fetcher tests.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from notion_sync.models import PropertyNames

REPO_ROOT = Path(__file__).resolve().parents[1]


# =============================================================================
# HTTP response fixtures
# =============================================================================


@pytest.fixture
def fake_http_response() -> Callable[..., MagicMock]:
    """Create a fake HTTP response with configurable attributes."""

    def _create(
        json_data: Any = None,
        content: bytes = b"",
        status_code: int = 200,
        reason: str = "OK",
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.ok = 200 <= status_code < 400  # as requests does
        response.content = content
        response.text = content.decode() if content else json.dumps(json_data)
        if json_data is None:
            response.json.side_effect = ValueError("Expecting value")
        else:
            response.json.return_value = json_data
        response.iter_content = MagicMock(return_value=iter([content] if content else []))
        response.__enter__.return_value = response
        response.__exit__.return_value = False
        return response

    return _create


@pytest.fixture
def fake_session() -> MagicMock:
    """A stand-in for requests.Session; set request/get side effects per test."""
    return MagicMock()


# =============================================================================
# Notion fixtures
# =============================================================================


@pytest.fixture
def props() -> PropertyNames:
    return PropertyNames(
        title="Task name",
        status="Status",
        chain="Chain",
        type="Type",
        file="Merkle file",
    )


@pytest.fixture
def mapping_data() -> dict[str, Any]:
    return {
        "chains": {"Ethereum": "1", "Base": "8453"},
        "types": {"Elastic": "ELASTIC", "Classic": "CLASSIC"},
    }


@pytest.fixture
def mapping_file(tmp_path: Path, mapping_data: dict[str, Any]) -> Path:
    path = tmp_path / "notion_mappings.json"
    path.write_text(json.dumps(mapping_data))
    return path


@pytest.fixture
def make_page() -> Callable[..., dict[str, Any]]:
    """Build a Notion page object in the shape the query API returns."""

    def _create(
        page_id: str = "page-1",
        title: str = "Cycle 20 Ethereum Elastic",
        chain: str | None = "Ethereum",
        types: list[str] | None = None,
        files: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        if types is None:
            types = ["Elastic"]
        if files is None:
            files = [
                {
                    "name": "merkle.json",
                    "type": "file",
                    "file": {"url": f"https://files.example.com/{page_id}.json", "expiry_time": ""},
                }
            ]
        return {
            "object": "page",
            "id": page_id,
            "properties": {
                "Task name": {
                    "type": "title",
                    "title": [{"type": "text", "text": {"content": title}, "plain_text": title}],
                },
                "Status": {"type": "status", "status": {"name": "Done"}},
                "Chain": {"type": "select", "select": {"name": chain} if chain else None},
                "Type": {"type": "multi_select", "multi_select": [{"name": t} for t in types]},
                "Merkle file": {"type": "files", "files": files},
            },
        }

    return _create
