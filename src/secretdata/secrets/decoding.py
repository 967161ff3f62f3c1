"""Secret normalization and decoding.

Objects arrive either as typed ``V1Secret`` instances from the Kubernetes
API client or as untyped manifest dictionaries (e.g. ``kubectl -o json``).
Both are normalized into a SecretRecord here, and a single function turns
a record into a DecodedSecret.
"""

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from kubernetes.client import V1Secret

from secretdata.exceptions import DecodeError, TypeMismatchError
from secretdata.models import BinaryData, DecodedSecret, EncodedData, NoData, RawData, SecretRecord

SECRET_KIND = "Secret"


def _raw_data(data: Any, *, where: str) -> RawData:
    """Classify a secret's data payload.

    Args:
        data: The ``data`` field of a secret.
        where: ``namespace/name`` of the secret, for error messages.

    Returns:
        The matching RawData variant.

    Raises:
        TypeMismatchError: If the payload is not a mapping of all-str or
            all-bytes values.

    """
    if data is None:
        return NoData()
    if not isinstance(data, Mapping):
        kind = type(data).__name__
        raise TypeMismatchError(f"data of secret {where} is {kind}, expected a mapping", kind=kind)

    values = dict(data)
    if all(isinstance(v, bytes) for v in values.values()) and values:
        return BinaryData(values=values)
    if all(isinstance(v, str) for v in values.values()):
        return EncodedData(values=values)

    kinds = sorted({type(v).__name__ for v in values.values()})
    raise TypeMismatchError(f"data of secret {where} mixes value types: {', '.join(kinds)}", kind="/".join(kinds))


def secret_record(obj: Any, namespace: str | None = None) -> SecretRecord:
    """Normalize an object returned by a fetch collaborator.

    Objects that are not secrets still produce a record carrying their
    observed kind, so that decoding rejects them.

    Args:
        obj: A ``V1Secret``, an untyped manifest dict, or anything else.
        namespace: Namespace the object was requested from, used when the
            object does not carry one itself.

    Returns:
        The normalized SecretRecord.

    """
    if isinstance(obj, V1Secret):
        # List items from the API client come without kind/apiVersion
        ns = (obj.metadata.namespace if obj.metadata else None) or namespace or ""
        name = (obj.metadata.name if obj.metadata else None) or ""
        return SecretRecord(
            kind=obj.kind or SECRET_KIND,
            namespace=ns,
            name=name,
            raw_data=_raw_data(obj.data, where=f"{ns}/{name}"),
        )

    if isinstance(obj, Mapping):
        metadata = obj.get("metadata") or {}
        ns = metadata.get("namespace") or namespace or ""
        name = metadata.get("name") or ""
        kind = str(obj.get("kind") or "<missing kind>")
        if kind != SECRET_KIND:
            return SecretRecord(kind=kind, namespace=ns, name=name)
        return SecretRecord(
            kind=kind,
            namespace=ns,
            name=name,
            raw_data=_raw_data(obj.get("data"), where=f"{ns}/{name}"),
        )

    metadata = getattr(obj, "metadata", None)
    return SecretRecord(
        kind=getattr(obj, "kind", None) or type(obj).__name__,
        namespace=getattr(metadata, "namespace", None) or namespace or "",
        name=getattr(metadata, "name", None) or "",
    )


def _b64decode(key: str, value: str) -> str:
    try:
        decoded = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as err:
        raise DecodeError(f"decode {key}={value!r}: {err}", key=key) from err
    return decoded.decode("utf-8", errors="replace")


def decode_secret(record: SecretRecord) -> DecodedSecret:
    """Decode a record's data into plain strings.

    Args:
        record: The record to decode.

    Returns:
        The DecodedSecret. ``data`` is None when the secret has no data.

    Raises:
        TypeMismatchError: If the record is not a Secret.
        DecodeError: If any base64 value is malformed.

    """
    if record.kind != SECRET_KIND:
        raise TypeMismatchError(f"{record.kind} is unexpected type", kind=record.kind)

    data: dict[str, str] | None
    match record.raw_data:
        case NoData():
            data = None
        case BinaryData(values=values):
            data = {key: value.decode("utf-8", errors="replace") for key, value in values.items()}
        case EncodedData(values=values):
            data = {key: _b64decode(key, value) for key, value in values.items()}

    return DecodedSecret(namespace=record.namespace, name=record.name, data=data)
