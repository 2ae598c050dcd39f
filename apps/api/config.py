"""
Configuration constants for the netanalyzer API
"""
import os

from netanalyzer.common import config as core_config

# Application settings
APP_TITLE = "netanalyzer API"
APP_VERSION = "1.0.0"

# Network file loaded and saved by default
DEFAULT_DATA_PATH = core_config.DATA_PATH
DEFAULT_DATA_FORMAT = os.getenv("NETANALYZER_DATA_FORMAT", "json")

# Default values
DEFAULT_PAGE_SIZE = 50
DEFAULT_RECOMMENDATION_DEPTH = core_config.RECOMMENDATION_DEPTH
DEFAULT_COMMUNITY_THRESHOLD = core_config.COMMUNITY_THRESHOLD
DEFAULT_SEARCH_ALGORITHM = core_config.SEARCH_ALGORITHM
