"""Kubernetes cluster interaction utilities.

This module provides the Cluster class, which talks to the Kubernetes API
through the official client: context selection, namespace listing and
secret retrieval.
"""

from typing import Any

import click
import questionary
from icecream import ic
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError, MaxRetryError
from urllib3.exceptions import TimeoutError as Urllib3TimeoutError

from secretdata import console
from secretdata.exceptions import CancelledError, ConfigurationError, FetchError, SecretDataError
from secretdata.models import SecretRecord
from secretdata.secrets.decoding import secret_record
from secretdata.styles import POINTER, PROMPT_STYLE, QMARK, context_choices


def _request_error(
    err: Exception,
    action: str,
    *,
    namespace: str | None = None,
    name: str | None = None,
) -> SecretDataError:
    """Translate a client exception into a package error.

    Args:
        err: The exception raised by the Kubernetes client.
        action: What was being attempted, e.g. ``list secrets in default``.
        namespace: Namespace involved, if any.
        name: Secret name involved, if any.

    Returns:
        CancelledError for request timeouts, FetchError otherwise.

    """
    if isinstance(err, ApiException):
        return FetchError(f"failed to {action}: ({err.status}) {err.reason}", namespace=namespace, name=name)

    reason = err.reason if isinstance(err, MaxRetryError) else err
    if isinstance(reason, Urllib3TimeoutError):
        return CancelledError(f"failed to {action}: request timed out")
    return FetchError(f"failed to {action}: {reason}", namespace=namespace, name=name)


class Cluster:
    """Fetches secrets through the Kubernetes API.

    Attributes:
        context: The active Kubernetes context name.
        kubeconfig: Path to the kubeconfig file, or None for the default.
        core_v1: CoreV1Api bound to the active context.

    """

    def __init__(
        self,
        *,
        select_context: bool = False,
        context: str | None = None,
        kubeconfig: str | None = None,
    ) -> None:
        """Initialize Cluster with context selection.

        Args:
            select_context: If True, prompt user to select a context.
            context: Context to use instead of the current one.
            kubeconfig: Path to a kubeconfig file.

        Raises:
            ConfigurationError: If the kubeconfig is invalid or missing, or
                the requested context does not exist.

        """
        self.kubeconfig: str | None = kubeconfig
        self.context: str = self._set_context(select_context=select_context, context=context, kubeconfig=kubeconfig)
        try:
            config.load_kube_config(config_file=kubeconfig, context=self.context)
        except ConfigException as e:
            raise ConfigurationError(f"Failed to load context {self.context!r}: {e}") from e
        self.core_v1 = client.CoreV1Api()

    @staticmethod
    def _set_context(*, select_context: bool, context: str | None, kubeconfig: str | None) -> str:
        """Set the Kubernetes context to use.

        Args:
            select_context: If True, prompt user to select a context.
            context: Explicitly requested context name.
            kubeconfig: Path to a kubeconfig file.

        Returns:
            The selected, requested or current context name.

        Raises:
            ConfigurationError: If kubeconfig is invalid or missing, or the
                requested context is unknown.
            click.Abort: If user cancels context selection.

        """
        try:
            contexts, current_context = config.list_kube_config_contexts(config_file=kubeconfig)
        except ConfigException as e:
            raise ConfigurationError(f"Invalid or missing kubeconfig: {e}") from e
        context_names: list[str] = [ctx["name"] for ctx in contexts]
        current_name: str | None = current_context["name"] if current_context else None

        if select_context:
            selected: str | None = questionary.select(
                "Select context to work with",
                choices=context_choices(context_names, current_name),
                default=current_name,
                style=PROMPT_STYLE,
                pointer=POINTER,
                qmark=QMARK,
            ).ask()
            if selected is None:
                console.warning("Context selection cancelled.")
                raise click.Abort()
        elif context:
            if context not in context_names:
                raise ConfigurationError(f"Context {context!r} not found in kubeconfig")
            selected = context
        else:
            selected = str(current_name)
        console.action(f"Working with {console.highlight(selected)} cluster")
        return selected

    def list_namespaces(self, *, timeout: float | None = None) -> list[str]:
        """Get all namespaces in the cluster.

        Args:
            timeout: Request timeout in seconds.

        Returns:
            List of namespace names.

        Raises:
            FetchError: If the request fails.
            CancelledError: If the request times out.

        """
        try:
            items = self.core_v1.list_namespace(_request_timeout=timeout).items
        except (ApiException, HTTPError) as e:
            raise _request_error(e, "list namespaces") from e
        ns_list = [ns.metadata.name for ns in items]
        ic(ns_list)

        return ns_list

    def list_secrets(
        self,
        namespace: str,
        *,
        name: str | None = None,
        label_selector: str | None = None,
        timeout: float | None = None,
    ) -> list[SecretRecord]:
        """List secrets in a namespace.

        Args:
            namespace: Namespace to list.
            name: Only return the secret with this name.
            label_selector: Label query, e.g. ``app=web,tier!=db``.
            timeout: Request timeout in seconds.

        Returns:
            Records for the secrets found.

        Raises:
            FetchError: If the request fails.
            CancelledError: If the request times out.

        """
        kwargs: dict[str, Any] = {"_request_timeout": timeout}
        if label_selector:
            kwargs["label_selector"] = label_selector
        if name:
            kwargs["field_selector"] = f"metadata.name={name}"
        ic(namespace, kwargs)

        try:
            items = self.core_v1.list_namespaced_secret(namespace, **kwargs).items
        except (ApiException, HTTPError) as e:
            raise _request_error(e, f"list secrets in {namespace}", namespace=namespace, name=name) from e

        return [secret_record(item, namespace) for item in items]

    def get_secret(self, namespace: str, name: str, *, timeout: float | None = None) -> SecretRecord:
        """Read a single secret.

        Args:
            namespace: Namespace of the secret.
            name: Name of the secret.
            timeout: Request timeout in seconds.

        Returns:
            The secret's record.

        Raises:
            FetchError: If the secret cannot be read (including 404).
            CancelledError: If the request times out.

        """
        try:
            secret = self.core_v1.read_namespaced_secret(name, namespace, _request_timeout=timeout)
        except (ApiException, HTTPError) as e:
            raise _request_error(e, f"get {name} in {namespace}", namespace=namespace, name=name) from e

        return secret_record(secret, namespace)

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Cluster(context={self.context!r}, kubeconfig={self.kubeconfig!r})"
