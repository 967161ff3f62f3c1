"""Namespace selection.

Turns the three mutually-exclusive namespace options into a single
NamespaceSelection.
"""

from icecream import ic

from secretdata.exceptions import ConfigurationError
from secretdata.models import AllNamespaces, MultiNamespaces, NamespaceSelection, SingleNamespace


def split_namespaces(value: str) -> list[str]:
    """Split a comma-separated namespace list.

    Whitespace around entries and empty entries are dropped; duplicates
    are removed keeping the first occurrence.

    Args:
        value: Comma-separated namespace names.

    Returns:
        The namespace names in the order given.

    """
    names: list[str] = []
    for part in value.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return names


def resolve_namespace_selection(
    namespace: str | None = None,
    all_namespaces: bool = False,
    multi_namespaces: str | None = None,
    *,
    namespace_explicit: bool = True,
) -> NamespaceSelection:
    """Resolve namespace options into exactly one selection mode.

    Args:
        namespace: A single namespace name.
        all_namespaces: Query every namespace.
        multi_namespaces: Comma-separated list of namespaces.
        namespace_explicit: False when ``namespace`` is a contextual
            default (e.g. from the kubeconfig) rather than user input.
            Such a value is discarded.

    Returns:
        The resolved NamespaceSelection.

    Raises:
        ConfigurationError: If no option or more than one option is set,
            or the multi-namespace list holds no usable names.

    """
    if not namespace_explicit:
        namespace = None

    selected = sum(bool(option) for option in (namespace, all_namespaces, multi_namespaces))
    if selected == 0:
        raise ConfigurationError("must select at least a namespace")
    if selected > 1:
        raise ConfigurationError("must choose one option to use for selecting namespace")

    selection: NamespaceSelection
    if namespace:
        selection = SingleNamespace(name=namespace)
    elif all_namespaces:
        selection = AllNamespaces()
    else:
        names = split_namespaces(multi_namespaces or "")
        if not names:
            raise ConfigurationError(f"--multi-namespaces {multi_namespaces!r} contains no namespace names")
        if len(names) == 1:
            selection = SingleNamespace(name=names[0])
        else:
            selection = MultiNamespaces(names=tuple(names))

    ic(selection)
    return selection
