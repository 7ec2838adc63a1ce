"""Configuration constants for the merkle URL updater."""

DEFAULT_RAW_PREFIX = "https://raw.githubusercontent.com/KyberNetwork/fairflow-reward/refs/heads/main"

# e.g. "1_ELASTIC_20.json" -> chain id, reward type, cycle
MERKLE_FILE_PATTERN = r"^([0-9]+)_([A-Za-z]+)_([0-9]+)\.json$"

URL_TEMPLATE = "{prefix}/cycle-{cycle}/{chain_id}_{reward_type}_{cycle}.json"

# Rewriting touches cycle N-2, so the new cycle must be at least 2
MIN_CYCLE = 2
