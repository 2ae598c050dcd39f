import os


def _get_int_env(var: str, default: int) -> int:
    """Read an integer environment variable, raising a clear error on bad values."""
    value = os.getenv(var)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise EnvironmentError(f"Environment variable {var} must be an integer, got {value!r}") from None


class Config:
    # Network data
    DATA_PATH = os.getenv("NETANALYZER_DATA_PATH", os.path.join("data", "Network.json"))

    # Logging
    LOG_LEVEL = os.getenv("NETANALYZER_LOG_LEVEL", "INFO").upper()

    # Analytics defaults
    RECOMMENDATION_DEPTH = _get_int_env("NETANALYZER_RECOMMENDATION_DEPTH", 2)
    COMMUNITY_THRESHOLD = _get_int_env("NETANALYZER_COMMUNITY_THRESHOLD", 1)
    SEARCH_ALGORITHM = os.getenv("NETANALYZER_SEARCH_ALGORITHM", "kmp")


CFG = Config()

# Module-level exports
DATA_PATH = CFG.DATA_PATH
LOG_LEVEL = CFG.LOG_LEVEL
RECOMMENDATION_DEPTH = CFG.RECOMMENDATION_DEPTH
COMMUNITY_THRESHOLD = CFG.COMMUNITY_THRESHOLD
SEARCH_ALGORITHM = CFG.SEARCH_ALGORITHM
