"""Aggregation of fetched secrets into the nested result set."""

from collections.abc import Iterable

from icecream import ic

from secretdata.exceptions import NotFoundError
from secretdata.models import FilterSpec, ResultSet, SecretRecord
from secretdata.secrets.decoding import decode_secret
from secretdata.secrets.filtering import matches


def aggregate_secrets(records: Iterable[SecretRecord], spec: FilterSpec) -> ResultSet:
    """Decode, filter and group records by namespace and name.

    Records are consumed one at a time; this function is the only writer
    of the returned mapping. Decoding errors abort immediately.

    Args:
        records: Records from the fetcher.
        spec: Filter criteria.

    Returns:
        Mapping of namespace -> secret name -> decoded data (None for
        secrets without data).

    Raises:
        DecodeError: If a secret value is malformed.
        TypeMismatchError: If a record is not a Secret.
        NotFoundError: If no secret passed the filter.

    """
    result: ResultSet = {}
    for record in records:
        secret = decode_secret(record)
        if not matches(spec, secret.namespace, secret.name):
            ic(f"skipping {secret.namespace}/{secret.name}")
            continue
        result.setdefault(secret.namespace, {})[secret.name] = secret.data

    if not result:
        raise NotFoundError("no secrets found")
    return result
