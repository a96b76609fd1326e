"""Data retrieval from Nomis datasets.

This module provides get_data, the main entry point for downloading a
Nomis dataset into a pandas DataFrame.

Examples:
    >>> from pynomis import get_data
    >>> df = get_data(
    ...     "NM_1_1",
    ...     time="latest",
    ...     geography="TYPE499",
    ...     measures=[20100, 20201],
    ...     sex=5,
    ... )
"""

from __future__ import annotations

import logging

import pandas as pd

from pynomis._types import AdditionalQueries, DataQuery, FilterInput
from pynomis.constants import RECORD_COUNT_COLUMN
from pynomis.dimensions import resolve_sex_dimension
from pynomis.exceptions import ValidationError
from pynomis.pagination import fetch_all_pages
from pynomis.query import build_query

logger = logging.getLogger(__name__)


def get_data(
    dataset_id: str | None = None,
    *,
    time: FilterInput = None,
    date: FilterInput = None,
    geography: FilterInput = None,
    sex: FilterInput = None,
    measures: FilterInput = None,
    additional_queries: AdditionalQueries = None,
    exclude_missing: bool = False,
    select: FilterInput = None,
    query: DataQuery | None = None,
) -> pd.DataFrame:
    """Retrieve a Nomis dataset as a DataFrame.

    Datasets are requested in CSV format and every column is returned as
    text. Queries returning more than 25,000 rows are split into several
    requests and the results combined into a single DataFrame.

    The time and date parameters should not be used together. If both are
    given, date is used and time is ignored. With several values, time
    returns every period between them inclusively, while date returns only
    the exact periods given: ``time=["first", "latest"]`` returns all data,
    ``date=["first", "latest"]`` only the first and latest periods.

    Args:
        dataset_id: The ID of the dataset to retrieve (e.g., "NM_1_1").
        time: One or more of "latest", "previous", "prevyear", "first", or
            period codes from the dataset's time codelist.
        date: Same values as time, selecting exact periods.
        geography: Geography codes, or a geography type such as "TYPE499".
            If None, all geographies are returned.
        sex: Sex codes. Datasets with a SEX dimension use 5 (male),
            6 (female) and 7 (all); datasets with C_SEX use 0 (all),
            1 (male) and 2 (female). Dropped if the dataset has neither.
        measures: Statistical measure codes. If None, all measures.
        additional_queries: Extra query parameters, either a string
            appended verbatim (e.g., "&age=0,22") or a mapping.
        exclude_missing: If True, the API excludes missing values.
        select: Columns to return (case-insensitive).
        query: A prebuilt DataQuery. It cannot be combined with the other
            arguments.

    Returns:
        The dataset as a DataFrame of strings.

    Raises:
        ValidationError: If no dataset ID is given, or if query is combined
            with individual filters.
        EmptyResultError: If the query matches no rows.
        DatasetNotFoundError: If sex is given and the dataset ID is unknown.
        APIError: If a request fails.

    Examples:
        >>> df = get_data(
        ...     "NM_168_1",
        ...     time="latest",
        ...     geography="2013265925",
        ...     sex=0,
        ...     select=["geography_code", "C_OCCPUK11H_0_NAME", "obs_vAlUE"],
        ... )
    """
    if query is None:
        if not dataset_id:
            raise ValidationError(
                "Dataset ID must be specified.", parameter="dataset_id", value=dataset_id
            )
        query = DataQuery.create(
            dataset_id,
            time=time,
            date=date,
            geography=geography,
            sex=sex,
            measures=measures,
            additional_queries=additional_queries,
            exclude_missing=exclude_missing,
            select=select,
        )
    elif dataset_id is not None or exclude_missing or any(
        value is not None
        for value in (time, date, geography, sex, measures, additional_queries, select)
    ):
        raise ValidationError(
            "Pass either a DataQuery or individual filters, not both.",
            parameter="query",
            value=query,
        )
    elif not query.dataset_id:
        raise ValidationError(
            "Dataset ID must be specified.", parameter="dataset_id", value=query.dataset_id
        )

    if query.date and query.time:
        logger.debug("Both date and time given for %s; using date", query.dataset_id)

    # Only look up the dataset definition when it changes the query
    sex_dimension = resolve_sex_dimension(query.dataset_id) if query.sex else None

    df = fetch_all_pages(query.dataset_id, build_query(query, sex_dimension))

    return _drop_record_count(df, query.select)


def _drop_record_count(df: pd.DataFrame, select: tuple[str, ...]) -> pd.DataFrame:
    """Drop RECORD_COUNT if a selection was given that did not ask for it.

    Without a selection the API returns every column, including
    RECORD_COUNT, and the frame is left as it is.
    """
    if not select:
        return df
    if RECORD_COUNT_COLUMN in {name.upper() for name in select}:
        return df
    return df.drop(columns=[RECORD_COUNT_COLUMN], errors="ignore")
