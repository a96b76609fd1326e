"""Dimension resolution for Nomis datasets.

Datasets encode sex with either a ``SEX`` or a ``C_SEX`` dimension, and the
query parameter must match. This module looks up the dataset definition to
find out which one a dataset uses. The lookup is repeated on every call.
"""

from __future__ import annotations

import logging

from pynomis._types import SexDimension
from pynomis.constants import C_SEX_CONCEPT_REF, SEX_CONCEPT_REF
from pynomis.fetchers import load_dataset_definitions
from pynomis.parsers import extract_concept_refs

logger = logging.getLogger(__name__)


def resolve_sex_dimension(dataset_id: str) -> SexDimension | None:
    """Find the sex dimension used by a dataset.

    Args:
        dataset_id: The Nomis dataset ID.

    Returns:
        SexDimension.C_SEX if the dataset declares a C_SEX dimension,
        otherwise SexDimension.SEX if it declares SEX, otherwise None.

    Raises:
        DatasetNotFoundError: If the dataset ID is unknown.
        APIError: If the metadata request fails.
    """
    key_families = load_dataset_definitions(dataset_id)
    concept_refs = set(extract_concept_refs(key_families[0]))

    if C_SEX_CONCEPT_REF in concept_refs:
        dimension = SexDimension.C_SEX
    elif SEX_CONCEPT_REF in concept_refs:
        dimension = SexDimension.SEX
    else:
        dimension = None

    logger.debug("Dataset %s sex dimension: %s", dataset_id, dimension)
    return dimension
