"""Configuration constants for the Notion merkle file fetcher."""

# Notion API
NOTION_BASE_URL = "https://api.notion.com/v1"
NOTION_API_VERSION = "2025-09-03"
TOKEN_ENV_VAR = "NOTION_TOKEN"

# Timeouts (seconds)
REQUEST_TIMEOUT = 60

# Mapping of Notion display names to chain ids and reward type codes
DEFAULT_MAPPING_PATH = "config/notion_mappings.json"

# Notion property names
DEFAULT_PROPERTIES = {
    "title": "Task name",
    "status": "Status",
    "chain": "Chain",
    "type": "Type",
    "file": "Merkle file",
}

# Status filter
DEFAULT_STATUS_DONE = "Done"
STATUS_TYPES = ("status", "select")
DEFAULT_STATUS_TYPE = "status"

# Query paging
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100

# Streamed download chunk size (bytes)
DOWNLOAD_CHUNK_SIZE = 64 * 1024
