"""kubectl-backed secret retrieval.

This module provides the Kubectl class, which fetches secrets by running
``kubectl get ... -o json`` and parsing the untyped JSON documents.
"""

import json
import subprocess
from typing import Any

from icecream import ic

from secretdata.exceptions import CancelledError, FetchError
from secretdata.models import SecretRecord
from secretdata.secrets.decoding import secret_record

# Error message constants
_ERR_KUBECTL_NOT_FOUND = "{binary} not found; please install kubectl and ensure it's on PATH"
_ERR_COMMAND_FAILED = "failed to {action} (exit code {code}){details}"


class Kubectl:
    """Fetches secrets through an external kubectl binary.

    Attributes:
        binary: The kubectl executable (overridable via KUBECTL_COMMAND).
        kubeconfig: Path passed as ``--kubeconfig``, if any.
        context: Context passed as ``--context``, if any.

    """

    def __init__(self, binary: str = "kubectl", *, kubeconfig: str | None = None, context: str | None = None) -> None:
        self.binary = binary
        self.kubeconfig = kubeconfig
        self.context = context

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"Kubectl(binary={self.binary!r}, context={self.context!r})"

    def _build_cmd(self, args: list[str]) -> list[str]:
        """Build a ``kubectl get`` command with common flags.

        Args:
            args: Resource type, name and selector arguments.

        Returns:
            List of command arguments ready for subprocess execution.

        """
        cmd: list[str] = [self.binary, "get", *args, "-o", "json"]
        if self.kubeconfig:
            cmd.append(f"--kubeconfig={self.kubeconfig}")
        if self.context:
            cmd.append(f"--context={self.context}")
        return cmd

    def _get(
        self,
        args: list[str],
        action: str,
        *,
        timeout: float | None,
        namespace: str | None = None,
        name: str | None = None,
    ) -> dict[str, Any]:
        """Run kubectl and parse its JSON output.

        Args:
            args: Arguments following ``kubectl get``.
            action: What is being attempted, for error messages.
            timeout: Seconds before the process is killed.
            namespace: Namespace involved, if any.
            name: Secret name involved, if any.

        Returns:
            The parsed JSON document.

        Raises:
            FetchError: If kubectl is missing, fails or prints invalid JSON.
            CancelledError: If kubectl does not finish within ``timeout``.

        """
        cmd = self._build_cmd(args)
        ic(cmd)

        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True, timeout=timeout)
        except FileNotFoundError as err:
            raise FetchError(_ERR_KUBECTL_NOT_FOUND.format(binary=self.binary), namespace=namespace, name=name) from err
        except subprocess.TimeoutExpired as err:
            raise CancelledError(f"failed to {action}: timed out after {timeout}s") from err
        except subprocess.CalledProcessError as err:
            stderr_msg = err.stderr.strip() if err.stderr else ""
            details = f" - {stderr_msg}" if stderr_msg else ""
            raise FetchError(
                _ERR_COMMAND_FAILED.format(action=action, code=err.returncode, details=details),
                namespace=namespace,
                name=name,
            ) from err

        try:
            document = json.loads(result.stdout)
        except json.JSONDecodeError as err:
            raise FetchError(f"failed to {action}: invalid kubectl output: {err}", namespace=namespace, name=name) from err
        if not isinstance(document, dict):
            raise FetchError(f"failed to {action}: unexpected kubectl output", namespace=namespace, name=name)
        return document

    def list_namespaces(self, *, timeout: float | None = None) -> list[str]:
        """Get all namespaces in the cluster.

        Args:
            timeout: Seconds before kubectl is killed.

        Returns:
            List of namespace names.

        """
        document = self._get(["namespace"], "list namespaces", timeout=timeout)
        ns_list = [item["metadata"]["name"] for item in document.get("items", [])]
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
            label_selector: Label query passed as ``--selector``.
            timeout: Seconds before kubectl is killed.

        Returns:
            Records for the objects kubectl returned.

        """
        args = ["secret", "--namespace", namespace]
        if label_selector:
            args.extend(["--selector", label_selector])
        if name:
            args.extend(["--field-selector", f"metadata.name={name}"])

        document = self._get(args, f"list secrets in {namespace}", timeout=timeout, namespace=namespace, name=name)
        items = document["items"] if "items" in document else [document]
        return [secret_record(item, namespace) for item in items]

    def get_secret(self, namespace: str, name: str, *, timeout: float | None = None) -> SecretRecord:
        """Read a single secret.

        Args:
            namespace: Namespace of the secret.
            name: Name of the secret.
            timeout: Seconds before kubectl is killed.

        Returns:
            The record for the object kubectl returned.

        """
        document = self._get(
            ["secret", name, "--namespace", namespace],
            f"get {name} in {namespace}",
            timeout=timeout,
            namespace=namespace,
            name=name,
        )
        return secret_record(document, namespace)
