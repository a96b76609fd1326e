"""Catalogue of available Nomis datasets.

This module provides functionality to look up and search the definitions
of Nomis datasets through the NomisCatalogue class.

Examples:
    >>> from pynomis import NomisCatalogue
    >>> catalogue = NomisCatalogue()
    >>> info = catalogue.data_info("NM_1_1")
    >>> results = catalogue.search(name="*jobseekers*")
"""

from __future__ import annotations

import pandas as pd

from pynomis._types import FilterInput, to_codes
from pynomis.constants import SEARCH_FIELDS
from pynomis.exceptions import EmptyResultError, ValidationError
from pynomis.fetchers import dataset_definition_url, load_dataset_definitions
from pynomis.parsers import key_families_to_frame


class NomisCatalogue:
    """Look up and search Nomis dataset definitions.

    Results are flattened into DataFrames with one row per dataset and
    dotted column names for nested fields (e.g., ``name.value``,
    ``components.dimension``). Nothing is cached; each call queries the API.

    Methods:
        data_info: Get the definition of one or all datasets.
        search: Search dataset definitions by name, keywords, and more.

    Examples:
        >>> catalogue = NomisCatalogue()
        >>> everything = catalogue.data_info()
        >>> claimants = catalogue.search(keywords="Claimants")
    """

    def data_info(self, dataset_id: str | None = None) -> pd.DataFrame:
        """Get the definition of a dataset, or of every dataset.

        Args:
            dataset_id: The dataset ID (e.g., "NM_1_1"). If None, the
                definitions of all available datasets are returned.

        Returns:
            A DataFrame with one row per dataset, including the ``id``,
            ``name.value`` and ``components.dimension`` columns.

        Raises:
            DatasetNotFoundError: If dataset_id is not a known dataset.
            APIError: If the request fails.

        Examples:
            >>> info = NomisCatalogue().data_info("NM_1_1")
            >>> info["components.dimension"].iloc[0]
        """
        return key_families_to_frame(load_dataset_definitions(dataset_id))

    def search(
        self,
        *,
        name: FilterInput = None,
        description: FilterInput = None,
        keywords: FilterInput = None,
        content_type: FilterInput = None,
        units: FilterInput = None,
    ) -> pd.DataFrame:
        """Search dataset definitions.

        Each criterion accepts a string or a list of strings; ``*`` is a
        wildcard. Values within one criterion are alternatives, and all
        criteria given must match.

        Args:
            name: Terms to match against dataset names (e.g., "*seekers*").
            description: Terms to match against dataset descriptions.
            keywords: Terms to match against dataset keywords.
            content_type: Content type codes (e.g., "sources").
            units: Terms to match against the units of measure.

        Returns:
            A DataFrame of matching dataset definitions.

        Raises:
            ValidationError: If no search criterion is given.
            EmptyResultError: If no dataset matches.
            APIError: If the request fails.

        Examples:
            >>> NomisCatalogue().search(name="*seekers*", keywords="Claimants")
        """
        query = self._build_search_query(
            name=name,
            description=description,
            keywords=keywords,
            content_type=content_type,
            units=units,
        )
        key_families = load_dataset_definitions(query=query)
        if not key_families:
            raise EmptyResultError(
                "The search did not return any datasets. Please check your search terms.",
                url=dataset_definition_url(query=query),
            )
        return key_families_to_frame(key_families)

    @staticmethod
    def _build_search_query(**criteria: FilterInput) -> str:
        """Build the search query string from the given criteria.

        Returns:
            ``search=<field>-<terms>`` segments joined with ``&``.

        Raises:
            ValidationError: If every criterion is empty.
        """
        segments = []
        for argument, field_name in SEARCH_FIELDS.items():
            terms = to_codes(criteria.get(argument))
            if terms:
                segments.append(f"search={field_name}-{','.join(terms)}")

        if not segments:
            valid = ", ".join(SEARCH_FIELDS)
            raise ValidationError(
                f"At least one search criterion must be given. Valid criteria are: {valid}.",
                parameter="search",
            )
        return "&".join(segments)

    def __repr__(self) -> str:
        """Return a string representation of the catalogue."""
        return f"NomisCatalogue(url='{dataset_definition_url()}')"
