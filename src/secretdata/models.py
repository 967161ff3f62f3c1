"""Data models for kubectl-secretdata.

This module provides type-safe data structures for the application:
namespace selection modes, raw and decoded secret records, and the
filter specification applied to them.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias


class OutputFormat(str, Enum):
    """Supported output formats.

    Inherits from str to allow direct use in string contexts
    (e.g., click choices, error messages).
    """

    JSON = "json"
    YAML = "yaml"


class Backend(str, Enum):
    """Ways of talking to the cluster."""

    API = "api"
    KUBECTL = "kubectl"


@dataclass(frozen=True, slots=True)
class SingleNamespace:
    """Query a single namespace.

    Attributes:
        name: The namespace name.

    """

    name: str


@dataclass(frozen=True, slots=True)
class AllNamespaces:
    """Query every namespace in the cluster."""


@dataclass(frozen=True, slots=True)
class MultiNamespaces:
    """Query an explicit whitelist of two or more namespaces.

    Attributes:
        names: The namespaces to query, in the order given by the user.

    """

    names: tuple[str, ...]


NamespaceSelection: TypeAlias = SingleNamespace | AllNamespaces | MultiNamespaces


@dataclass(frozen=True, slots=True)
class BinaryData:
    """Secret values already decoded to bytes by the producing layer."""

    values: dict[str, bytes]


@dataclass(frozen=True, slots=True)
class EncodedData:
    """Secret values still base64-encoded, as found in untyped manifests."""

    values: dict[str, str]


@dataclass(frozen=True, slots=True)
class NoData:
    """The secret has no data field at all."""


RawData: TypeAlias = BinaryData | EncodedData | NoData


@dataclass(frozen=True, slots=True)
class SecretRecord:
    """One object as retrieved from a fetch collaborator.

    Attributes:
        kind: Resource kind reported by the producer.
        namespace: Namespace the object lives in.
        name: Object name.
        raw_data: The undecoded data payload.

    """

    kind: str
    namespace: str
    name: str
    raw_data: RawData = field(default_factory=NoData)


@dataclass(frozen=True, slots=True)
class DecodedSecret:
    """A secret with its values decoded to strings.

    Attributes:
        namespace: Namespace the secret lives in.
        name: Secret name.
        data: Decoded key/value pairs, or None if the secret has no data.

    """

    namespace: str
    name: str
    data: dict[str, str] | None


@dataclass(frozen=True, slots=True)
class FilterSpec:
    """Criteria a decoded secret must satisfy to be reported.

    Attributes:
        pattern: Compiled secret name pattern, searched (not anchored).
        selection: The resolved namespace selection.
        label_selector: Opaque label query passed through to the cluster.

    """

    pattern: re.Pattern[str]
    selection: NamespaceSelection
    label_selector: str | None = None


ResultSet: TypeAlias = dict[str, dict[str, dict[str, str] | None]]
