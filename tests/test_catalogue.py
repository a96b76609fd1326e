"""Tests for the catalogue module."""

from unittest.mock import patch

import pandas as pd
import pytest

from pynomis.catalogue import NomisCatalogue
from pynomis.exceptions import DatasetNotFoundError, EmptyResultError, ValidationError

FAMILIES = [
    {
        "id": "NM_1_1",
        "name": {"value": "Jobseeker's Allowance with rates and proportions"},
        "components": {"dimension": [{"conceptref": "GEOGRAPHY"}, {"conceptref": "SEX"}]},
    },
    {
        "id": "NM_168_1",
        "name": {"value": "annual population survey - regional - employment by occupation"},
        "components": {"dimension": [{"conceptref": "GEOGRAPHY"}, {"conceptref": "C_SEX"}]},
    },
]


class TestDataInfo:
    """Tests for the data_info method."""

    @patch("pynomis.catalogue.load_dataset_definitions")
    def test_all_datasets(self, mock_load):
        """Test that every dataset definition is returned."""
        mock_load.return_value = FAMILIES

        info = NomisCatalogue().data_info()

        mock_load.assert_called_once_with(None)
        assert isinstance(info, pd.DataFrame)
        assert info["id"].tolist() == ["NM_1_1", "NM_168_1"]
        assert "name.value" in info.columns
        assert "components.dimension" in info.columns

    @patch("pynomis.catalogue.load_dataset_definitions")
    def test_single_dataset(self, mock_load):
        """Test the definition of one dataset."""
        mock_load.return_value = FAMILIES[:1]

        info = NomisCatalogue().data_info("NM_1_1")

        mock_load.assert_called_once_with("NM_1_1")
        refs = [d["conceptref"] for d in info["components.dimension"].iloc[0]]
        assert refs == ["GEOGRAPHY", "SEX"]

    @patch("pynomis.catalogue.load_dataset_definitions")
    def test_unknown_dataset(self, mock_load):
        """Test that an unknown ID raises DatasetNotFoundError."""
        mock_load.side_effect = DatasetNotFoundError("Missing", dataset_id="lalala")

        with pytest.raises(DatasetNotFoundError):
            NomisCatalogue().data_info("lalala")

    @pytest.mark.network
    def test_live_data_info(self):
        """Test the live listing of all datasets."""
        info = NomisCatalogue().data_info()
        assert not info.empty
        assert "id" in info.columns

    @pytest.mark.network
    def test_live_unknown_dataset(self):
        """Test that the live API rejects an unknown ID."""
        with pytest.raises(DatasetNotFoundError):
            NomisCatalogue().data_info("lalala")


class TestSearch:
    """Tests for the search method."""

    @patch("pynomis.catalogue.load_dataset_definitions")
    def test_single_criterion(self, mock_load):
        """Test a search by name."""
        mock_load.return_value = FAMILIES[:1]

        results = NomisCatalogue().search(name="*seekers*")

        mock_load.assert_called_once_with(query="search=name-*seekers*")
        assert results["id"].tolist() == ["NM_1_1"]

    @patch("pynomis.catalogue.load_dataset_definitions")
    def test_multiple_criteria(self, mock_load):
        """Test that criteria are combined in a fixed order."""
        mock_load.return_value = FAMILIES

        NomisCatalogue().search(
            units="*persons*", keywords=["Claimants", "Jobseekers"], content_type="sources"
        )

        mock_load.assert_called_once_with(
            query="search=keywords-Claimants,Jobseekers&search=contenttype-sources"
            "&search=units-*persons*"
        )

    def test_no_criteria(self):
        """Test that a search without criteria raises ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            NomisCatalogue().search()
        assert exc_info.value.parameter == "search"

    @patch("pynomis.catalogue.load_dataset_definitions")
    def test_no_matches(self, mock_load):
        """Test that no matching datasets raise EmptyResultError."""
        mock_load.return_value = []

        with pytest.raises(EmptyResultError) as exc_info:
            NomisCatalogue().search(name="*zzzz*")

        assert exc_info.value.url.endswith("def.sdmx.json?search=name-*zzzz*")

    @pytest.mark.network
    def test_live_search(self):
        """Test a live keyword search."""
        results = NomisCatalogue().search(keywords="Claimants")
        assert isinstance(results, pd.DataFrame)
        assert not results.empty


class TestRepr:
    """Tests for the string representation."""

    def test_repr(self):
        """Test that repr names the definition endpoint."""
        assert "def.sdmx.json" in repr(NomisCatalogue())
