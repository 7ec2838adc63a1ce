"""Query construction and validation of Notion rows."""

from typing import Any, Iterable

from .models import DownloadItem, Mapping, PropertyNames, RowError, cycle_label


def build_query(
    cycle: int,
    props: PropertyNames,
    status_done: str,
    status_type: str,
    page_size: int,
) -> dict[str, Any]:
    """Build the data source query body for one cycle's finished rows."""
    return {
        "page_size": page_size,
        "filter": {
            "and": [
                {"property": props.title, "title": {"contains": cycle_label(cycle)}},
                {"property": props.status, status_type: {"equals": status_done}},
                {"property": props.file, "files": {"is_not_empty": True}},
            ]
        },
    }


def title_text(prop: dict) -> str:
    """Join the plain text of a title property's rich text items."""
    parts = []
    for item in prop.get("title") or []:
        text = item.get("plain_text") or (item.get("text") or {}).get("content") or ""
        if text:
            parts.append(text)
    return "".join(parts)


def file_url(entry: dict) -> str:
    """Pick the download URL of a files property entry.

    Notion-hosted files are preferred over external links.
    """
    hosted = (entry.get("file") or {}).get("url")
    external = (entry.get("external") or {}).get("url")

    if entry.get("type") == "file" and hosted:
        return hosted
    if entry.get("type") == "external" and external:
        return external
    if hosted:
        return hosted
    if external:
        return external
    raise RowError(f"file entry {entry.get('name', '')!r} has no downloadable URL")


def parse_row(page: dict, props: PropertyNames, mapping: Mapping, label: str) -> DownloadItem | None:
    """Validate one row and turn it into a DownloadItem.

    Returns None if the title does not actually mention the cycle label.
    """
    page_id = page.get("id", "")
    properties = page.get("properties") or {}

    def fail(message: str) -> RowError:
        return RowError(f"page {page_id}: {message}")

    title_prop = properties.get(props.title)
    if not title_prop or title_prop.get("type") != "title":
        raise fail(f"missing/invalid title property {props.title!r}")
    if label not in title_text(title_prop):
        return None

    chain_select = (properties.get(props.chain) or {}).get("select") or {}
    chain_name = chain_select.get("name")
    if not chain_name:
        raise fail(f"missing chain select {props.chain!r}")
    if chain_name not in mapping.chains:
        raise fail(f"chain {chain_name!r} not found in mapping")
    chain_id = mapping.chains[chain_name]

    type_prop = properties.get(props.type)
    if not type_prop or type_prop.get("type") != "multi_select":
        raise fail(f"missing type multi_select {props.type!r}")
    options = type_prop.get("multi_select") or []
    if len(options) != 1:
        raise fail(f"expected exactly 1 Type, got {len(options)}")
    type_name = options[0].get("name", "")
    if type_name not in mapping.types:
        raise fail(f"type {type_name!r} not found in mapping")
    reward_type = mapping.types[type_name]

    file_prop = properties.get(props.file)
    if not file_prop or file_prop.get("type") != "files":
        raise fail(f"missing files property {props.file!r}")
    files = file_prop.get("files") or []
    if len(files) != 1:
        raise fail(f"expected exactly 1 merkle file, got {len(files)}")
    try:
        url = file_url(files[0])
    except RowError as e:
        raise fail(str(e)) from e

    return DownloadItem(
        chain_id=chain_id,
        reward_type=reward_type,
        page_id=page_id,
        source_url=url,
    )


def collect_items(
    pages: Iterable[dict],
    props: PropertyNames,
    mapping: Mapping,
    cycle: int,
) -> list[DownloadItem]:
    """Validate all rows of a cycle and check every mapped chain is covered."""
    label = cycle_label(cycle)
    items: list[DownloadItem] = []
    seen: set[tuple[str, str]] = set()

    for page in pages:
        item = parse_row(page, props, mapping, label)
        if item is None:
            continue
        if item.key in seen:
            raise RowError(f"page {item.page_id}: duplicate chain/type {item.chain_id}:{item.reward_type}")
        seen.add(item.key)
        items.append(item)

    if not items:
        raise RowError(f"no matching Notion rows found for {label}")

    seen_chains = {item.chain_id for item in items}
    for name, chain_id in mapping.chains.items():
        if chain_id not in seen_chains:
            raise RowError(f"no merkle files found for chain {name!r} (id {chain_id}) in {label}")
    return items
