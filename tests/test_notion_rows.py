"""Tests for Notion query building and row validation."""

from __future__ import annotations

import pytest

from notion_sync.models import Mapping, RowError
from notion_sync.rows import build_query, collect_items, file_url, parse_row, title_text


@pytest.fixture
def mapping(mapping_data) -> Mapping:
    return Mapping(chains=mapping_data["chains"], types=mapping_data["types"])


class TestBuildQuery:
    """Tests for the query filter body."""

    def test_status_filter(self, props) -> None:
        body = build_query(20, props, "Done", "status", 100)
        assert body["page_size"] == 100
        title, status, files = body["filter"]["and"]
        assert title == {"property": "Task name", "title": {"contains": "Cycle 20"}}
        assert status == {"property": "Status", "status": {"equals": "Done"}}
        assert files == {"property": "Merkle file", "files": {"is_not_empty": True}}

    def test_select_filter(self, props) -> None:
        body = build_query(3, props, "Shipped", "select", 50)
        status = body["filter"]["and"][1]
        assert status == {"property": "Status", "select": {"equals": "Shipped"}}


class TestTitleText:
    def test_joins_plain_text(self) -> None:
        prop = {"type": "title", "title": [{"plain_text": "Cycle "}, {"plain_text": "20"}]}
        assert title_text(prop) == "Cycle 20"

    def test_falls_back_to_text_content(self) -> None:
        prop = {"type": "title", "title": [{"text": {"content": "Cycle 7"}}]}
        assert title_text(prop) == "Cycle 7"

    def test_empty(self) -> None:
        assert title_text({"type": "title", "title": []}) == ""


class TestFileUrl:
    def test_hosted_file(self) -> None:
        assert file_url({"type": "file", "file": {"url": "https://a"}}) == "https://a"

    def test_external_file(self) -> None:
        assert file_url({"type": "external", "external": {"url": "https://b"}}) == "https://b"

    def test_hosted_preferred_when_type_unknown(self) -> None:
        entry = {"file": {"url": "https://a"}, "external": {"url": "https://b"}}
        assert file_url(entry) == "https://a"

    def test_no_url(self) -> None:
        with pytest.raises(RowError, match="no downloadable URL"):
            file_url({"name": "merkle.json", "type": "file", "file": {"url": ""}})


class TestParseRow:
    """Tests for single row validation."""

    def test_valid_row(self, make_page, props, mapping) -> None:
        item = parse_row(make_page(page_id="abc"), props, mapping, "Cycle 20")
        assert item is not None
        assert item.chain_id == "1"
        assert item.reward_type == "ELASTIC"
        assert item.page_id == "abc"
        assert item.source_url == "https://files.example.com/abc.json"
        assert item.output_name(20) == "1_ELASTIC_20.json"

    def test_title_without_label_is_skipped(self, make_page, props, mapping) -> None:
        page = make_page(title="Cycle 2 Ethereum")
        assert parse_row(page, props, mapping, "Cycle 20") is None

    def test_invalid_title_property(self, make_page, props, mapping) -> None:
        page = make_page()
        page["properties"]["Task name"]["type"] = "rich_text"
        with pytest.raises(RowError, match="invalid title property"):
            parse_row(page, props, mapping, "Cycle 20")

    def test_missing_chain(self, make_page, props, mapping) -> None:
        with pytest.raises(RowError, match="missing chain select"):
            parse_row(make_page(chain=None), props, mapping, "Cycle 20")

    def test_unmapped_chain(self, make_page, props, mapping) -> None:
        with pytest.raises(RowError, match="chain 'Solana' not found in mapping"):
            parse_row(make_page(chain="Solana"), props, mapping, "Cycle 20")

    def test_two_types(self, make_page, props, mapping) -> None:
        page = make_page(types=["Elastic", "Classic"])
        with pytest.raises(RowError, match="expected exactly 1 Type, got 2"):
            parse_row(page, props, mapping, "Cycle 20")

    def test_no_type(self, make_page, props, mapping) -> None:
        with pytest.raises(RowError, match="expected exactly 1 Type, got 0"):
            parse_row(make_page(types=[]), props, mapping, "Cycle 20")

    def test_unmapped_type(self, make_page, props, mapping) -> None:
        with pytest.raises(RowError, match="type 'Legacy' not found in mapping"):
            parse_row(make_page(types=["Legacy"]), props, mapping, "Cycle 20")

    def test_two_files(self, make_page, props, mapping) -> None:
        entry = {"type": "external", "external": {"url": "https://b"}}
        with pytest.raises(RowError, match="expected exactly 1 merkle file, got 2"):
            parse_row(make_page(files=[entry, entry]), props, mapping, "Cycle 20")

    def test_file_without_url(self, make_page, props, mapping) -> None:
        page = make_page(page_id="p9", files=[{"name": "x.json", "type": "file"}])
        with pytest.raises(RowError, match="page p9: file entry 'x.json'"):
            parse_row(page, props, mapping, "Cycle 20")


class TestCollectItems:
    """Tests for cycle-wide checks over all rows."""

    def test_collects_all_chains(self, make_page, props, mapping) -> None:
        pages = [
            make_page(page_id="a", chain="Ethereum", types=["Elastic"]),
            make_page(page_id="b", chain="Base", types=["Elastic"]),
            make_page(page_id="c", chain="Base", types=["Classic"]),
        ]
        items = collect_items(pages, props, mapping, 20)
        assert [item.key for item in items] == [
            ("1", "ELASTIC"),
            ("8453", "ELASTIC"),
            ("8453", "CLASSIC"),
        ]

    def test_duplicate_pair(self, make_page, props, mapping) -> None:
        pages = [
            make_page(page_id="a", chain="Ethereum"),
            make_page(page_id="b", chain="Ethereum"),
            make_page(page_id="c", chain="Base"),
        ]
        with pytest.raises(RowError, match="page b: duplicate chain/type 1:ELASTIC"):
            collect_items(pages, props, mapping, 20)

    def test_missing_chain(self, make_page, props, mapping) -> None:
        pages = [make_page(page_id="a", chain="Ethereum")]
        with pytest.raises(RowError, match="no merkle files found for chain 'Base' \\(id 8453\\)"):
            collect_items(pages, props, mapping, 20)

    def test_no_rows(self, make_page, props, mapping) -> None:
        pages = [make_page(title="Cycle 19 Ethereum")]
        with pytest.raises(RowError, match="no matching Notion rows found for Cycle 20"):
            collect_items(pages, props, mapping, 20)
