"""Secret lookup subpackage.

This package contains the namespace selector, the fetcher, the decoder,
the filter predicate and the aggregator.
"""

from secretdata.secrets.aggregation import aggregate_secrets
from secretdata.secrets.decoding import decode_secret, secret_record
from secretdata.secrets.fetching import FetchContext, SecretClient, SecretFetcher
from secretdata.secrets.filtering import matches
from secretdata.secrets.selection import resolve_namespace_selection, split_namespaces

__all__ = [
    # selection
    "resolve_namespace_selection",
    "split_namespaces",
    # fetching
    "FetchContext",
    "SecretClient",
    "SecretFetcher",
    # decoding
    "decode_secret",
    "secret_record",
    # filtering
    "matches",
    # aggregation
    "aggregate_secrets",
]
