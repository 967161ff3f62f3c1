"""Tests for secrets/selection.py module."""

import pytest

from secretdata.exceptions import ConfigurationError
from secretdata.models import AllNamespaces, MultiNamespaces, SingleNamespace
from secretdata.secrets.selection import resolve_namespace_selection, split_namespaces


class TestResolveNamespaceSelection:
    """Tests for resolving the namespace options."""

    def test_single_namespace(self):
        """Test a single namespace resolves to SingleNamespace."""
        assert resolve_namespace_selection(namespace="test1") == SingleNamespace(name="test1")

    def test_all_namespaces(self):
        """Test the all-namespaces flag resolves to AllNamespaces."""
        assert resolve_namespace_selection(all_namespaces=True) == AllNamespaces()

    def test_multi_namespaces(self):
        """Test several namespaces resolve to a whitelist."""
        selection = resolve_namespace_selection(multi_namespaces="ns1,ns2,ns3")
        assert selection == MultiNamespaces(names=("ns1", "ns2", "ns3"))

    def test_multi_namespaces_with_one_entry_is_single(self):
        """Test a one-entry list behaves exactly like --namespace."""
        assert resolve_namespace_selection(multi_namespaces="test1") == resolve_namespace_selection(namespace="test1")

    def test_multi_namespaces_collapsing_to_one_entry(self):
        """Test duplicates and blanks are dropped before demotion."""
        assert resolve_namespace_selection(multi_namespaces=" test1, ,test1,") == SingleNamespace(name="test1")

    def test_nothing_selected(self):
        """Test that no option at all is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_namespace_selection()

        assert "must select at least a namespace" in str(exc_info.value)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"namespace": "ns", "all_namespaces": True},
            {"namespace": "ns", "multi_namespaces": "a,b"},
            {"all_namespaces": True, "multi_namespaces": "a,b"},
            {"namespace": "ns", "all_namespaces": True, "multi_namespaces": "a"},
        ],
    )
    def test_conflicting_options(self, kwargs):
        """Test that two or more options are always rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_namespace_selection(**kwargs)

        assert "must choose one option" in str(exc_info.value)

    def test_multi_namespaces_without_names(self):
        """Test a list of only separators is rejected."""
        with pytest.raises(ConfigurationError):
            resolve_namespace_selection(multi_namespaces=" , ,")

    def test_contextual_namespace_is_discarded(self):
        """Test a namespace the user did not give is ignored."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_namespace_selection(namespace="default", namespace_explicit=False)

        assert "must select at least a namespace" in str(exc_info.value)

    def test_contextual_namespace_does_not_conflict(self):
        """Test a discarded namespace does not count towards conflicts."""
        selection = resolve_namespace_selection(namespace="default", all_namespaces=True, namespace_explicit=False)
        assert selection == AllNamespaces()


class TestSplitNamespaces:
    """Tests for comma-separated namespace parsing."""

    def test_keeps_order(self):
        """Test names keep the order they were given in."""
        assert split_namespaces("b,a,c") == ["b", "a", "c"]

    def test_strips_and_deduplicates(self):
        """Test whitespace, blanks and duplicates are removed."""
        assert split_namespaces(" a , b,,a ") == ["a", "b"]

    def test_empty(self):
        """Test an empty string yields no names."""
        assert split_namespaces("") == []
