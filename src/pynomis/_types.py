"""Type definitions and enums for pynomis.

This module contains all shared type definitions, enums, and dataclasses
used throughout the package.

Classes:
    SexDimension: Enum for the two sex codings used by Nomis datasets.
    DataQuery: Dataclass holding the filter set for a data request.

Type Aliases:
    FilterValue: Type for a single filter code.
    FilterInput: Type accepted by list-valued filters.
    AdditionalQueries: Type accepted for extra query parameters.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from pynomis.exceptions import ValidationError

# Type aliases for common patterns
FilterValue = str | int | float
"""Type for individual filter values (codes, period names, keywords)."""

FilterInput = FilterValue | Iterable[FilterValue] | None
"""Type for list-valued filters. Single values are wrapped in a tuple."""

AdditionalQueries = str | Mapping[str, FilterInput] | None
"""Type for extra query parameters.

A string is appended to the query verbatim, so it must start with ``&``.
A mapping is rendered as ``&key=value`` segments in insertion order::

    additional_queries = "&age=0,22"
    additional_queries = {"age": [0, 22], "rural_urban": 0}
"""


class SexDimension(str, Enum):
    """Sex coding used by a dataset.

    Nomis datasets encode sex with one of two mutually exclusive dimensions.
    The enum value is the query parameter name used for that dimension.

    Attributes:
        SEX: Datasets with a ``SEX`` dimension (5 male, 6 female, 7 all).
        C_SEX: Datasets with a ``C_SEX`` dimension (0 all, 1 male, 2 female).
    """

    SEX = "sex"
    C_SEX = "c_sex"


def to_codes(value: FilterInput) -> tuple[str, ...]:
    """Normalise a scalar or iterable filter into a tuple of strings.

    Whole-number floats are written without a decimal part, so ``20100.0``
    becomes ``"20100"``.

    Args:
        value: None, a single value, or an iterable of values.

    Returns:
        A tuple of string codes, empty if value is None.

    Raises:
        ValidationError: If a value is a boolean.

    Examples:
        >>> to_codes(5)
        ('5',)
        >>> to_codes(["latest", "first"])
        ('latest', 'first')
    """
    if value is None:
        return ()
    if isinstance(value, str | int | float):
        return (_code_to_str(value),)
    return tuple(_code_to_str(item) for item in value)


def _code_to_str(value: FilterValue) -> str:
    if isinstance(value, bool):
        raise ValidationError(
            f"Filter values must be codes, not booleans: {value!r}.", value=value
        )
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True, slots=True)
class DataQuery:
    """The filter set for a single data request.

    Every field except dataset_id is optional. List-valued fields accept
    scalars, lists, or numbers and are stored as tuples of strings.

    If both time and date are given, date takes precedence and time is
    ignored when the query string is built.

    Attributes:
        dataset_id: The Nomis dataset ID (e.g., "NM_1_1").
        time: Period keywords or codes; returns the inclusive range between them.
        date: Period keywords or codes; returns only the exact periods given.
        geography: Geography codes or a geography type such as "TYPE499".
        sex: Sex codes. The parameter name depends on the dataset.
        measures: Statistical measure codes.
        additional_queries: Extra query parameters, see AdditionalQueries.
        exclude_missing: Whether to ask the API to drop missing values.
        select: Column names to return (case-insensitive).

    Examples:
        >>> query = DataQuery("NM_1_1", time="latest", sex=5)
        >>> query.sex
        ('5',)
    """

    dataset_id: str
    time: tuple[str, ...] = ()
    date: tuple[str, ...] = ()
    geography: tuple[str, ...] = ()
    sex: tuple[str, ...] = ()
    measures: tuple[str, ...] = ()
    additional_queries: AdditionalQueries = None
    exclude_missing: bool = False
    select: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("time", "date", "geography", "sex", "measures", "select"):
            object.__setattr__(self, name, to_codes(getattr(self, name)))
        object.__setattr__(self, "exclude_missing", bool(self.exclude_missing))

    @classmethod
    def create(
        cls,
        dataset_id: str,
        *,
        time: FilterInput = None,
        date: FilterInput = None,
        geography: FilterInput = None,
        sex: FilterInput = None,
        measures: FilterInput = None,
        additional_queries: AdditionalQueries = None,
        exclude_missing: bool = False,
        select: FilterInput = None,
    ) -> "DataQuery":
        """Build a DataQuery from keyword arguments."""
        return cls(
            dataset_id,
            time=time,  # type: ignore[arg-type]
            date=date,  # type: ignore[arg-type]
            geography=geography,  # type: ignore[arg-type]
            sex=sex,  # type: ignore[arg-type]
            measures=measures,  # type: ignore[arg-type]
            additional_queries=additional_queries,
            exclude_missing=exclude_missing,
            select=select,  # type: ignore[arg-type]
        )
