"""Name and namespace filtering of decoded secrets."""

from secretdata.models import AllNamespaces, FilterSpec, MultiNamespaces, SingleNamespace


def matches(spec: FilterSpec, namespace: str, name: str) -> bool:
    """Decide whether a secret should be reported.

    The name pattern is searched anywhere in the name unless it anchors
    itself. The namespace must belong to the selection.

    Args:
        spec: The filter specification.
        namespace: Namespace of the secret.
        name: Name of the secret.

    Returns:
        True if the secret passes both the name and namespace checks.

    """
    if not spec.pattern.search(name):
        return False

    match spec.selection:
        case SingleNamespace(name=selected):
            return namespace == selected
        case MultiNamespaces(names=names):
            return namespace in names
        case AllNamespaces():
            return True
    return False
