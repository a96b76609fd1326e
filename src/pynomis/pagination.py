"""Paginated retrieval of Nomis data.

The API returns at most MAX_PAGE_SIZE rows per request. Every row carries a
RECORD_COUNT column with the total number of rows matching the query, so the
first page tells us how many further pages to request. Pages are fetched
one after another and concatenated in request order.
"""

from __future__ import annotations

import logging

import pandas as pd

from pynomis.constants import (
    MAX_PAGE_SIZE,
    NOMIS_BASE_URL,
    RECORD_COUNT_COLUMN,
    RECORD_OFFSET_PARAM,
)
from pynomis.exceptions import APIError, EmptyResultError
from pynomis.fetchers import fetch_csv

logger = logging.getLogger(__name__)


def data_url(dataset_id: str, query: str) -> str:
    """Return the CSV data URL for a dataset and query fragment.

    Examples:
        >>> data_url("NM_1_1", "&time=latest")
        'https://www.nomisweb.co.uk/api/v01/dataset/NM_1_1.data.csv?&time=latest'
    """
    return f"{NOMIS_BASE_URL}/{dataset_id}.data.csv?{query}"


def page_offsets(record_count: int, page_size: int = MAX_PAGE_SIZE) -> list[int]:
    """Compute the record offsets of the pages after the first.

    Offsets run from page_size up to and including the largest multiple of
    page_size not above record_count. When record_count is an exact
    multiple, the last offset may return no rows.

    Examples:
        >>> page_offsets(60000)
        [25000, 50000]
        >>> page_offsets(25000)
        [25000]
        >>> page_offsets(24999)
        []
    """
    return list(range(page_size, record_count + 1, page_size))


def read_record_count(page: pd.DataFrame, url: str) -> int:
    """Read the total row count reported on the first row of a page.

    Raises:
        APIError: If the column is missing or not an integer.
    """
    if RECORD_COUNT_COLUMN not in page.columns:
        raise APIError(
            f"Response from {url} has no {RECORD_COUNT_COLUMN} column.",
            url=url,
        )
    raw = page[RECORD_COUNT_COLUMN].iloc[0]
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise APIError(
            f"Response from {url} has a non-numeric {RECORD_COUNT_COLUMN}: {raw!r}",
            url=url,
        ) from e


def fetch_all_pages(dataset_id: str, query: str) -> pd.DataFrame:
    """Fetch every page of a query and concatenate them.

    Args:
        dataset_id: The Nomis dataset ID.
        query: The query fragment built by pynomis.query.build_query.

    Returns:
        All rows of all pages, in request order, with a fresh index.

    Raises:
        EmptyResultError: If the first page has no rows.
        APIError: If any request fails. Pages already fetched are discarded.
    """
    url = data_url(dataset_id, query)
    first_page = fetch_csv(url)

    if first_page.empty:
        raise EmptyResultError(
            "The API request did not return any results. Please check your parameters.",
            url=url,
        )

    record_count = read_record_count(first_page, url)
    offsets = page_offsets(record_count)
    if not offsets:
        return first_page

    pages = [first_page]
    for index, offset in enumerate(offsets, start=1):
        logger.info("Retrieving additional page %d of %d", index, len(offsets))
        pages.append(fetch_csv(f"{url}&{RECORD_OFFSET_PARAM}={offset:d}"))

    return pd.concat([page for page in pages if not page.empty], ignore_index=True)
