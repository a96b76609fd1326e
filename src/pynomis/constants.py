"""Constants and configuration for pynomis.

This module contains all configuration values, URLs, and lookup tables
used throughout the package. Centralising these values makes it easier
to update them and ensures consistency.

Constants:
    NOMIS_BASE_URL: Base URL for the Nomis dataset API.
    DEFAULT_TIMEOUT: Default timeout for HTTP requests (seconds).
    DEFAULT_RETRIES: Number of retry attempts for failed requests.
    MAX_PAGE_SIZE: Maximum rows the API returns for a single request.
    RECORD_COUNT_COLUMN: Column reporting the total rows of a query.
    RECORD_OFFSET_PARAM: Query parameter used to page through results.
    TIME_KEYWORDS: Relative period keywords understood by the API.
"""

from __future__ import annotations

# =============================================================================
# API Configuration
# =============================================================================

# Base URL for the Nomis RESTful API (no trailing slash)
NOMIS_BASE_URL: str = "https://www.nomisweb.co.uk/api/v01/dataset"

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT: int = 30

# Number of retry attempts for failed HTTP requests
DEFAULT_RETRIES: int = 3

# Delay multiplier between retries (seconds)
RETRY_DELAY_MULTIPLIER: float = 0.5

# =============================================================================
# Pagination
# =============================================================================

# Hard cap on rows per request for guest users
MAX_PAGE_SIZE: int = 25000

# Total rows matching a query, repeated on every row of every page
RECORD_COUNT_COLUMN: str = "RECORD_COUNT"

RECORD_OFFSET_PARAM: str = "recordOffset"

# =============================================================================
# Query Building
# =============================================================================

# Relative period keywords accepted by the time and date parameters
TIME_KEYWORDS: frozenset[str] = frozenset({"latest", "previous", "prevyear", "first"})

# Concept references of the two sex codings used across datasets.
# SEX: 5 = male, 6 = female, 7 = all persons.
# C_SEX: 0 = all persons, 1 = male, 2 = female.
SEX_CONCEPT_REF: str = "SEX"
C_SEX_CONCEPT_REF: str = "C_SEX"

# Fields accepted by the dataset definition search endpoint
SEARCH_FIELDS: dict[str, str] = {
    "name": "name",
    "description": "description",
    "keywords": "keywords",
    "content_type": "contenttype",
    "units": "units",
}
