"""Custom exceptions for kubectl-secretdata.

This module defines the exception hierarchy used throughout the application.
Every error aborts the whole invocation; none of them is retried.
"""


class SecretDataError(Exception):
    """Base exception for all kubectl-secretdata errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch all errors with a single except clause.
    """

    pass


class ConfigurationError(SecretDataError):
    """Raised when command-line options are missing or contradictory.

    This can occur when:
    - No namespace selection option was given
    - More than one namespace selection option was given
    - The output format or name pattern is invalid
    - The kubeconfig is invalid or missing
    """

    pass


class FetchError(SecretDataError):
    """Raised when retrieving secrets or namespaces from the cluster fails.

    The message names the namespace (and secret, if any) involved; the
    underlying cause is chained via ``__cause__``.
    """

    def __init__(self, message: str, *, namespace: str | None = None, name: str | None = None) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.name = name


class DecodeError(SecretDataError):
    """Raised when a secret value is not valid base64."""

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key = key


class TypeMismatchError(SecretDataError):
    """Raised when a retrieved object is not a Secret.

    This typically means a broad query returned an unrelated resource
    (for example a Pod) or the producer returned an unexpected shape.
    """

    def __init__(self, message: str, *, kind: str) -> None:
        super().__init__(message)
        self.kind = kind


class NotFoundError(SecretDataError):
    """Raised when the query was valid but no secret matched."""

    pass


class CancelledError(SecretDataError):
    """Raised when the caller cancelled the fetch or its deadline expired."""

    pass
