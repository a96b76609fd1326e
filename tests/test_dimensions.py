"""Tests for the dimensions module."""

from unittest.mock import patch

import pytest

from pynomis._types import SexDimension
from pynomis.dimensions import resolve_sex_dimension
from pynomis.exceptions import APIError, DatasetNotFoundError


def _key_family(*concept_refs):
    """Build a key family declaring the given dimensions."""
    return {
        "id": "NM_TEST",
        "components": {"dimension": [{"conceptref": ref} for ref in concept_refs]},
    }


class TestResolveSexDimension:
    """Tests for the resolve_sex_dimension function."""

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_c_sex(self, mock_load):
        """Test a dataset with a C_SEX dimension."""
        mock_load.return_value = [_key_family("GEOGRAPHY", "C_SEX", "MEASURES")]
        assert resolve_sex_dimension("NM_168_1") is SexDimension.C_SEX
        mock_load.assert_called_once_with("NM_168_1")

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_sex(self, mock_load):
        """Test a dataset with a SEX dimension."""
        mock_load.return_value = [_key_family("GEOGRAPHY", "SEX", "ITEM")]
        assert resolve_sex_dimension("NM_1_1") is SexDimension.SEX

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_c_sex_checked_first(self, mock_load):
        """Test that C_SEX takes precedence if both are declared."""
        mock_load.return_value = [_key_family("SEX", "C_SEX")]
        assert resolve_sex_dimension("NM_X") is SexDimension.C_SEX

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_neither(self, mock_load):
        """Test a dataset without a sex dimension."""
        mock_load.return_value = [_key_family("GEOGRAPHY", "MEASURES")]
        assert resolve_sex_dimension("NM_X") is None

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_not_cached(self, mock_load):
        """Test that every call looks the dataset up again."""
        mock_load.return_value = [_key_family("SEX")]
        resolve_sex_dimension("NM_1_1")
        resolve_sex_dimension("NM_1_1")
        assert mock_load.call_count == 2

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_unknown_dataset_propagates(self, mock_load):
        """Test that lookup failures propagate unchanged."""
        error = DatasetNotFoundError("Missing", dataset_id="lalala")
        mock_load.side_effect = error

        with pytest.raises(DatasetNotFoundError) as exc_info:
            resolve_sex_dimension("lalala")

        assert exc_info.value is error

    @patch("pynomis.dimensions.load_dataset_definitions")
    def test_transport_error_propagates(self, mock_load):
        """Test that transport failures propagate."""
        mock_load.side_effect = APIError("down")

        with pytest.raises(APIError):
            resolve_sex_dimension("NM_1_1")

    @pytest.mark.network
    def test_live_sex_dataset(self):
        """Test a known SEX dataset against the live API."""
        assert resolve_sex_dimension("NM_1_1") is SexDimension.SEX
