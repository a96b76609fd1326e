"""HTTP fetching for the Nomis API.

This module handles all HTTP communication with the Nomis API, including
retry logic for transient failures and error handling. Responses are never
cached: every call goes to the network.

Public Functions:
    fetch_text: Fetch a URL and return the response body as text.
    fetch_json: Fetch JSON from a URL with retries.
    fetch_csv: Fetch a CSV document and parse it into a DataFrame.
    dataset_definition_url: Build the URL of the dataset definition endpoint.
    load_dataset_definitions: Load the key family definitions of one or all datasets.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import pandas as pd
import requests

from pynomis.constants import (
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    NOMIS_BASE_URL,
    RETRY_DELAY_MULTIPLIER,
)
from pynomis.exceptions import APIError, DatasetNotFoundError
from pynomis.parsers import extract_key_families, parse_csv

logger = logging.getLogger(__name__)

# =============================================================================
# Low-Level HTTP Functions
# =============================================================================


def _fetch_impl(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    timeout: int = DEFAULT_TIMEOUT,
    retries: int = DEFAULT_RETRIES,
) -> requests.Response:
    """Issue a GET request with retry logic.

    Implements linear backoff between retry attempts for transient
    failures. Client errors (4xx) are not retried.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.
        timeout: Request timeout in seconds.
        retries: Number of retry attempts.

    Returns:
        The successful response.

    Raises:
        APIError: If all retry attempts fail, or on a client error.
    """
    last_error: Exception | None = None

    for attempt in range(retries):
        try:
            logger.debug("GET %s (attempt %d of %d)", url, attempt + 1, retries)
            response = requests.get(url, params=params, timeout=timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            last_error = e
        except requests.exceptions.ConnectionError as e:
            last_error = e
        except requests.exceptions.HTTPError as e:
            # Don't retry client errors (4xx)
            if e.response is not None and 400 <= e.response.status_code < 500:
                raise APIError(
                    f"Request to {url} failed: {e}",
                    url=url,
                    status_code=e.response.status_code,
                ) from e
            last_error = e
        except requests.exceptions.RequestException as e:
            last_error = e

        if attempt < retries - 1:
            time.sleep(RETRY_DELAY_MULTIPLIER * (attempt + 1))

    raise APIError(
        f"Request to {url} failed after {retries} attempts: {last_error}",
        url=url,
    )


def fetch_text(url: str, *, params: dict[str, Any] | None = None) -> str:
    """Fetch a URL and return the decoded response body.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.

    Returns:
        The response body as text.

    Raises:
        APIError: If the request fails after all retries.
    """
    response = _fetch_impl(url, params=params)
    # Nomis serves CSV without a charset; requests would otherwise guess ISO-8859-1
    if response.encoding is None or response.encoding.lower() == "iso-8859-1":
        response.encoding = "utf-8"
    return response.text


def fetch_json(url: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Fetch JSON from a URL with automatic retries.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.

    Returns:
        The parsed JSON response as a dictionary.

    Raises:
        APIError: If the request fails or the body is not valid JSON.
    """
    response = _fetch_impl(url, params=params)
    try:
        result: dict[str, Any] = response.json()
    except ValueError as e:
        raise APIError(f"Response from {url} is not valid JSON: {e}", url=url) from e
    return result


def fetch_csv(url: str) -> pd.DataFrame:
    """Fetch a CSV document and parse it with every column as text.

    The URL is requested exactly as given; query values are not re-encoded.

    Args:
        url: The full URL, including its query string.

    Returns:
        The parsed DataFrame. An empty body gives an empty DataFrame.

    Raises:
        APIError: If the request fails after all retries.
    """
    return parse_csv(fetch_text(url))


# =============================================================================
# Nomis API-Specific Functions
# =============================================================================


def dataset_definition_url(dataset_id: str | None = None, query: str = "") -> str:
    """Return the URL of the SDMX-JSON dataset definition endpoint.

    Args:
        dataset_id: A dataset ID, or None for every dataset.
        query: An optional query string, appended after ``?`` as written.

    Examples:
        >>> dataset_definition_url("NM_1_1")
        'https://www.nomisweb.co.uk/api/v01/dataset/NM_1_1/def.sdmx.json'
    """
    if dataset_id is None:
        url = f"{NOMIS_BASE_URL}/def.sdmx.json"
    else:
        url = f"{NOMIS_BASE_URL}/{dataset_id}/def.sdmx.json"
    return f"{url}?{query}" if query else url


def load_dataset_definitions(
    dataset_id: str | None = None,
    *,
    query: str = "",
) -> list[dict[str, Any]]:
    """Load dataset definitions (key families) from the Nomis API.

    Args:
        dataset_id: The dataset ID (e.g., 'NM_1_1'), or None for all datasets.
        query: Optional query string, such as a search expression.

    Returns:
        The list of key family dictionaries in the response.

    Raises:
        DatasetNotFoundError: If dataset_id is given and the API knows no
            such dataset.
        APIError: If the request fails.
    """
    url = dataset_definition_url(dataset_id, query)
    try:
        data = fetch_json(url)
    except APIError as e:
        if dataset_id is not None and e.status_code == 404:
            raise DatasetNotFoundError(
                f"Dataset '{dataset_id}' not found. Use NomisCatalogue().search() "
                f"to find available datasets.",
                dataset_id=dataset_id,
                url=url,
            ) from e
        raise

    key_families = extract_key_families(data)
    if dataset_id is not None and not key_families:
        raise DatasetNotFoundError(
            f"Dataset '{dataset_id}' not found. Use NomisCatalogue().search() "
            f"to find available datasets.",
            dataset_id=dataset_id,
            url=url,
        )
    return key_families
