"""Parsing utilities for Nomis API responses.

This module turns raw API payloads into pandas structures: CSV data
responses into text-typed DataFrames, and SDMX-JSON dataset definitions
into key family records and concept references.

Public Functions:
    parse_csv: Parse a CSV response with every column as text.
    extract_key_families: Pull the key family list out of a definition response.
    extract_concept_refs: List the dimension concept references of a key family.
    key_families_to_frame: Flatten key families into a DataFrame.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

import pandas as pd

# =============================================================================
# Data Parsing
# =============================================================================


def parse_csv(text: str) -> pd.DataFrame:
    """Parse a CSV document into a DataFrame of strings.

    No type inference is done and no missing-value sentinels are
    recognised, so codes such as "NA" or "0001" are kept as written.

    Args:
        text: The CSV body.

    Returns:
        The parsed DataFrame. A blank body gives an empty DataFrame.

    Examples:
        >>> df = parse_csv("GEOGRAPHY_CODE,OBS_VALUE\\nE92000001,0012\\n")
        >>> df["OBS_VALUE"].tolist()
        ['0012']
    """
    if not text.strip():
        return pd.DataFrame()
    return pd.read_csv(StringIO(text), dtype=str, keep_default_na=False)


# =============================================================================
# Metadata Extraction Functions
# =============================================================================


def extract_key_families(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Extract the key family definitions from an SDMX-JSON response.

    The API answers an unknown dataset with a structure that has no key
    families, so an empty list is returned in that case.

    Args:
        data: The parsed JSON response of a ``def.sdmx.json`` request.

    Returns:
        The list of key family dictionaries.
    """
    key_families = (data.get("structure") or {}).get("keyfamilies") or {}
    families = key_families.get("keyfamily") or []
    # A single match may be returned as an object rather than a list
    if isinstance(families, dict):
        return [families]
    return list(families)


def extract_concept_refs(key_family: dict[str, Any]) -> list[str]:
    """List the concept references of a key family's dimensions.

    Args:
        key_family: A single key family dictionary.

    Returns:
        The conceptref code of each dimension, in declaration order.

    Examples:
        >>> extract_concept_refs(
        ...     {"components": {"dimension": [{"conceptref": "GEOGRAPHY"},
        ...                                   {"conceptref": "SEX"}]}}
        ... )
        ['GEOGRAPHY', 'SEX']
    """
    dimensions = (key_family.get("components") or {}).get("dimension") or []
    if isinstance(dimensions, dict):
        dimensions = [dimensions]
    return [dim["conceptref"] for dim in dimensions if dim.get("conceptref")]


def key_families_to_frame(key_families: list[dict[str, Any]]) -> pd.DataFrame:
    """Flatten key families into a DataFrame with dotted column names.

    Nested objects become columns such as ``name.value`` and
    ``components.dimension``; lists are left as Python lists.

    Args:
        key_families: Key family dictionaries from the API.

    Returns:
        One row per dataset.
    """
    if not key_families:
        return pd.DataFrame()
    return pd.json_normalize(key_families, sep=".")
