"""kubectl-secretdata: Display decoded Kubernetes secret data.

This package finds Secrets in one, several or all namespaces, decodes
their base64 values and prints them as YAML or JSON.

Example usage:
    from secretdata import SecretFinder, Settings, resolve_namespace_selection

    settings = Settings.from_options(output="json", regex="^db-")
    selection = resolve_namespace_selection(multi_namespaces="dev,staging")
    with SecretFinder(settings) as finder:
        print(finder.run(selection))
"""

__version__ = "0.3.0"

from secretdata.cli import cli
from secretdata.cluster import Cluster
from secretdata.core.finder import SecretFinder
from secretdata.exceptions import (
    CancelledError,
    ConfigurationError,
    DecodeError,
    FetchError,
    NotFoundError,
    SecretDataError,
    TypeMismatchError,
)
from secretdata.kubectl import Kubectl
from secretdata.secrets.selection import resolve_namespace_selection
from secretdata.settings import Settings

__all__ = [
    # Version
    "__version__",
    # Main CLI
    "cli",
    # Classes
    "Cluster",
    "Kubectl",
    "SecretFinder",
    "Settings",
    # Functions
    "resolve_namespace_selection",
    # Exceptions
    "SecretDataError",
    "CancelledError",
    "ConfigurationError",
    "DecodeError",
    "FetchError",
    "NotFoundError",
    "TypeMismatchError",
]
