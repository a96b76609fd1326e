"""Query string construction for Nomis data requests.

This module maps a DataQuery to the query string of a ``.data.csv``
request. It does no I/O: the sex dimension of the dataset must be
resolved beforehand (see pynomis.dimensions).

Each parameter is emitted as an ``&key=value`` segment, in a fixed order:
time or date, geography, sex, measures, additional queries, missing-value
exclusion, and column selection. List values are comma-joined with no
whitespace and are not URL-escaped, which is the literal form the API
expects for codes and ranges.

Examples:
    >>> from pynomis._types import DataQuery
    >>> build_query(DataQuery.create("NM_1_1", time="latest", measures=[20100]))
    '&time=latest&measures=20100'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pynomis._types import AdditionalQueries, DataQuery, SexDimension, to_codes
from pynomis.constants import RECORD_COUNT_COLUMN
from pynomis.exceptions import ValidationError


def build_query(query: DataQuery, sex_dimension: SexDimension | None = None) -> str:
    """Build the query string fragment for a data request.

    Args:
        query: The filter set.
        sex_dimension: The sex coding of the dataset. If None, any sex
            filter is dropped, since not every dataset has a sex dimension.

    Returns:
        The ``&``-joined query fragment, without a leading ``?``.

    Raises:
        ValidationError: If additional_queries has an unsupported type.
    """
    segments = [
        _period_segment(query),
        _segment("geography", query.geography),
        _sex_segment(query.sex, sex_dimension),
        _segment("measures", query.measures),
        render_additional_queries(query.additional_queries),
        "&ExcludeMissingValues=true" if query.exclude_missing else "",
        _select_segment(query.select),
    ]
    return "".join(segments)


def _segment(name: str, values: Iterable[str]) -> str:
    values = list(values)
    if not values:
        return ""
    return f"&{name}={','.join(values)}"


def _period_segment(query: DataQuery) -> str:
    # date and time are never sent together; date wins
    if query.date:
        return _segment("date", query.date)
    return _segment("time", query.time)


def _sex_segment(sex: tuple[str, ...], sex_dimension: SexDimension | None) -> str:
    if not sex or sex_dimension is None:
        return ""
    return _segment(sex_dimension.value, sex)


def _select_segment(select: tuple[str, ...]) -> str:
    if not select:
        return ""
    return _segment("select", select_columns(select))


def select_columns(select: Iterable[str]) -> list[str]:
    """Uppercase and de-duplicate selected columns, appending RECORD_COUNT.

    RECORD_COUNT is always requested so that the pagination step can read
    the total number of rows.

    Examples:
        >>> select_columns(["geography_code", "obs_value", "GEOGRAPHY_CODE"])
        ['GEOGRAPHY_CODE', 'OBS_VALUE', 'RECORD_COUNT']
    """
    columns = [name.upper() for name in select]
    columns.append(RECORD_COUNT_COLUMN)
    return list(dict.fromkeys(columns))


def render_additional_queries(additional_queries: AdditionalQueries) -> str:
    """Render extra query parameters.

    Strings are returned verbatim. Mappings become ``&key=value`` segments
    in insertion order, with list values comma-joined.

    Raises:
        ValidationError: If the value is neither a string nor a mapping.
    """
    if additional_queries is None:
        return ""
    if isinstance(additional_queries, str):
        return additional_queries
    if isinstance(additional_queries, Mapping):
        return "".join(
            _segment(str(key), to_codes(value)) for key, value in additional_queries.items()
        )
    raise ValidationError(
        "additional_queries must be a string or a mapping of parameter names to values.",
        parameter="additional_queries",
        value=additional_queries,
    )
