"""Tests for secrets/aggregation.py module."""

import re

import pytest

from conftest import secret_manifest
from secretdata.exceptions import DecodeError, NotFoundError, TypeMismatchError
from secretdata.models import AllNamespaces, EncodedData, FilterSpec, SecretRecord, SingleNamespace
from secretdata.secrets.aggregation import aggregate_secrets
from secretdata.secrets.decoding import secret_record


def _spec(pattern: str = ".*", selection=None) -> FilterSpec:
    return FilterSpec(pattern=re.compile(pattern), selection=selection or AllNamespaces())


class TestAggregateSecrets:
    """Tests for building the nested result set."""

    def test_groups_by_namespace_and_name(self, sample_manifests):
        """Test records are grouped namespace -> name -> data."""
        records = [secret_record(m) for m in sample_manifests]

        result = aggregate_secrets(records, _spec("^secret[0-9]$"))

        assert result == {
            "test1": {"secret1": {"key1": "value1", "key2": "value2", "key3": "value3"}},
            "test2": {"secret2": {"key1": "value1", "key2": "value2", "key3": "value3"}},
        }

    def test_secret_without_data_is_kept(self):
        """Test a secret without data appears with None data."""
        result = aggregate_secrets([secret_record(secret_manifest("test2", "nodata", None))], _spec())

        assert result == {"test2": {"nodata": None}}

    def test_filtered_records_are_dropped(self, sample_manifests):
        """Test records outside the selection are skipped silently."""
        records = [secret_record(m) for m in sample_manifests]

        result = aggregate_secrets(records, _spec(selection=SingleNamespace(name="international")))

        assert list(result) == ["international"]

    def test_nothing_matches(self, sample_manifests):
        """Test an empty result raises NotFoundError."""
        records = [secret_record(m) for m in sample_manifests]

        with pytest.raises(NotFoundError) as exc_info:
            aggregate_secrets(records, _spec("^notfound$"))

        assert str(exc_info.value) == "no secrets found"

    def test_no_records(self):
        """Test an empty fetch raises NotFoundError."""
        with pytest.raises(NotFoundError):
            aggregate_secrets([], _spec())

    def test_unexpected_kind_aborts_even_when_filtered_out(self, sample_manifests):
        """Test a non-secret fails the run although its name would not match."""
        records = [secret_record(m) for m in sample_manifests]
        records.append(secret_record({"kind": "Pod", "metadata": {"namespace": "test1", "name": "web"}}))

        with pytest.raises(TypeMismatchError) as exc_info:
            aggregate_secrets(records, _spec("^secret"))

        assert exc_info.value.kind == "Pod"

    def test_decode_error_aborts(self):
        """Test a malformed value aborts the whole aggregation."""
        records = [
            secret_record(secret_manifest("test1", "secret1", {"key1": "value1"})),
            SecretRecord(kind="Secret", namespace="test1", name="broken", raw_data=EncodedData(values={"k": "%%%"})),
        ]

        with pytest.raises(DecodeError):
            aggregate_secrets(records, _spec())

    def test_consumes_generators(self, sample_manifests):
        """Test records may be supplied lazily."""
        records = (secret_record(m) for m in sample_manifests)

        result = aggregate_secrets(records, _spec())

        assert sum(len(secrets) for secrets in result.values()) == 8
