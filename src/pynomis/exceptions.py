"""Custom exceptions for pynomis.

This module defines the exception hierarchy used throughout the package.
All exceptions inherit from NomisError, making it easy to catch all
package-specific errors.

Exception Hierarchy:
    NomisError (base)
    ├── APIError: Network and API communication errors.
    │   └── DatasetNotFoundError: Dataset ID unknown to the Nomis API.
    └── ValidationError: Input validation errors.
        └── EmptyResultError: A query matched no rows.

Examples:
    >>> from pynomis import get_data
    >>> from pynomis.exceptions import EmptyResultError, NomisError
    >>> try:
    ...     df = get_data("NM_1_1", geography="NOT_A_GEOGRAPHY")
    ... except EmptyResultError as e:
    ...     print(f"No data: {e}")
    ... except NomisError as e:
    ...     print(f"Nomis error: {e}")
"""

from __future__ import annotations


class NomisError(Exception):
    """Base exception for all pynomis errors.

    This is the root of the exception hierarchy. Catching this exception
    will catch all package-specific errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class APIError(NomisError):
    """Raised when API requests fail.

    This exception is raised when:
    - Network requests to the Nomis API fail after retries
    - The API returns a client error (4xx)
    - A field needed for pagination is missing from the response

    Attributes:
        message: Human-readable error description.
        url: The URL that failed, if available.
        status_code: HTTP status code, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DatasetNotFoundError(APIError):
    """Raised when a dataset definition lookup finds no such dataset.

    Attributes:
        message: Human-readable error description.
        dataset_id: The dataset ID that was looked up.
        url: The metadata URL that was requested.
    """

    def __init__(
        self,
        message: str,
        *,
        dataset_id: str | None = None,
        url: str | None = None,
    ) -> None:
        self.dataset_id = dataset_id
        super().__init__(message, url=url)


class ValidationError(NomisError):
    """Raised when input validation fails.

    This exception is raised when:
    - Required parameters are missing
    - Parameter values have an unsupported type

    Attributes:
        message: Human-readable error description.
        parameter: The parameter that failed validation, if available.
        value: The invalid value, if available.
    """

    def __init__(
        self,
        message: str,
        *,
        parameter: str | None = None,
        value: object = None,
    ) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(message)


class EmptyResultError(ValidationError):
    """Raised when the API answers successfully but with no matching rows.

    An empty result almost always means the filters are too narrow or
    invalid for the dataset, so it is treated as a parameter problem.

    Attributes:
        message: Human-readable error description.
        url: The URL that returned no rows, if available.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        self.url = url
        super().__init__(message)
