"""Constants for the citeview package."""

import re

# Regular expression patterns
# First line of a citation record: "[<identifier>] (<engine>)"
RECORD_HEADER_RE = re.compile(r'\[(.*)\]\s*\((.*)\)')

# External program
DEFAULT_EXECUTABLE = "pyopl"
SEARCH_FLAG = "--search"
FETCH_FLAG = "--fetch"

# Engines known to the external program
DEFAULT_ENGINES = ["arxiv", "crossref", "dblp", "inspire"]

# Default configuration values
DEFAULT_CONFIG_PATH = "~/.config/citeview/config.yaml"
DEFAULT_LOG_LEVEL = "INFO"

# Result view
DEFAULT_RECORD_HEIGHT = 4
DEFAULT_BUFFER_NAME = "*pyopl*"
