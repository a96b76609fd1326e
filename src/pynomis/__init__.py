"""pynomis - Retrieve Nomis labour market and census statistics.

This package provides a convenient interface for downloading datasets from
Nomis, the UK Office for National Statistics service for labour market and
census data. Queries larger than the API's per-request row limit are split
into several requests and the results combined into a single DataFrame.

Main Objects:
    get_data: Download a dataset as a pandas DataFrame.
    DataQuery: A reusable set of filters for get_data.
    NomisCatalogue: Look up and search dataset definitions.

Examples:
    >>> from pynomis import NomisCatalogue, get_data
    >>> # Find datasets
    >>> catalogue = NomisCatalogue()
    >>> results = catalogue.search(name="*jobseekers*")
    >>> # Download the latest data for each country
    >>> df = get_data(
    ...     "NM_1_1",
    ...     time="latest",
    ...     geography="TYPE499",
    ...     measures=[20100, 20201],
    ...     sex=5,
    ... )
"""

from __future__ import annotations

import importlib.metadata
import logging

__version__ = importlib.metadata.version("pynomis")

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pynomis._types import DataQuery, SexDimension
from pynomis.catalogue import NomisCatalogue
from pynomis.dataset import get_data

# Exceptions
from pynomis.exceptions import (
    APIError,
    DatasetNotFoundError,
    EmptyResultError,
    NomisError,
    ValidationError,
)

__all__ = [
    "APIError",
    "DataQuery",
    "DatasetNotFoundError",
    "EmptyResultError",
    "NomisCatalogue",
    "NomisError",
    "SexDimension",
    "ValidationError",
    "get_data",
]
