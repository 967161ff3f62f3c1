"""Shared test fixtures for kubectl-secretdata tests."""

import base64
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from secretdata.exceptions import FetchError
from secretdata.models import SecretRecord
from secretdata.secrets.decoding import secret_record

# (namespace, name, data) of the secrets every fake cluster holds
SAMPLE_SECRETS: list[tuple[str, str, dict[str, str] | None]] = [
    ("kube-system", "konnectivity-agent-token", {"ca.crt": "value1", "token": "value2", "namespace": "value3"}),
    ("kube-system", "hoge", {"somthing-secret": "value1", "private-value": "value2"}),
    ("kube-system", "foo", {"dictionary": "value1", "banana": "value2", "dangerous-0138033": "value2"}),
    ("test1", "secret1", {"key1": "value1", "key2": "value2", "key3": "value3"}),
    ("test2", "secret2", {"key1": "value1", "key2": "value2", "key3": "value3"}),
    ("test2", "privatevalue2", {"key1": "value1"}),
    ("test2", "nodata", None),
    ("international", "greeding", {"english": "hello", "japanese": "konnichiwa", "spanish": "hola"}),
]


def b64(value: str) -> str:
    """Base64-encode a text value the way the API server does."""
    return base64.b64encode(value.encode()).decode()


def secret_manifest(namespace: str, name: str, data: dict[str, str] | None, kind: str = "Secret") -> dict[str, Any]:
    """Build an untyped Secret manifest with base64-encoded data."""
    return {
        "apiVersion": "v1",
        "kind": kind,
        "metadata": {"namespace": namespace, "name": name},
        "data": None if data is None else {key: b64(value) for key, value in data.items()},
    }


class FakeSecretClient:
    """In-memory fetch collaborator.

    Reading an unknown secret returns a Pod, mimicking a broad query that
    picks up an unrelated resource.
    """

    def __init__(self, manifests: list[dict[str, Any]], *, fail_namespaces: tuple[str, ...] = ()) -> None:
        self.manifests = manifests
        self.fail_namespaces = fail_namespaces
        self.calls: list[tuple[Any, ...]] = []
        self.timeouts: list[float | None] = []

    def list_namespaces(self, *, timeout: float | None = None) -> list[str]:
        self.calls.append(("list_namespaces",))
        self.timeouts.append(timeout)
        return sorted({m["metadata"]["namespace"] for m in self.manifests})

    def list_secrets(
        self,
        namespace: str,
        *,
        name: str | None = None,
        label_selector: str | None = None,
        timeout: float | None = None,
    ) -> list[SecretRecord]:
        self.calls.append(("list_secrets", namespace, name, label_selector))
        self.timeouts.append(timeout)
        if namespace in self.fail_namespaces:
            raise FetchError(f"failed to list secrets in {namespace}: boom", namespace=namespace)
        return [
            secret_record(m)
            for m in self.manifests
            if m["metadata"]["namespace"] == namespace and (name is None or m["metadata"]["name"] == name)
        ]

    def get_secret(self, namespace: str, name: str, *, timeout: float | None = None) -> SecretRecord:
        self.calls.append(("get_secret", namespace, name))
        self.timeouts.append(timeout)
        for m in self.manifests:
            if m["metadata"]["namespace"] == namespace and m["metadata"]["name"] == name:
                return secret_record(m)
        return secret_record({"kind": "Pod", "metadata": {"namespace": namespace, "name": name}})


@pytest.fixture
def sample_manifests():
    """Untyped manifests for SAMPLE_SECRETS."""
    return [secret_manifest(ns, name, data) for ns, name, data in SAMPLE_SECRETS]


@pytest.fixture
def fake_client(sample_manifests):
    """Fake fetch collaborator holding the sample secrets."""
    return FakeSecretClient(sample_manifests)


@pytest.fixture
def mock_kube_contexts():
    """Mock kubernetes config contexts."""
    with patch("kubernetes.config.list_kube_config_contexts") as mock:
        mock.return_value = (
            [{"name": "test-context"}, {"name": "other-context"}],
            {"name": "test-context"},
        )
        yield mock


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api for namespace and secret requests."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        ns_items = []
        for name in ["default", "kube-system", "monitoring"]:
            ns = MagicMock()
            ns.metadata.name = name
            ns_items.append(ns)
        api_instance.list_namespace.return_value.items = ns_items
        api_instance.list_namespaced_secret.return_value.items = []
        yield api_instance


@pytest.fixture
def cluster_mocks(mock_kube_contexts, mock_kube_config, mock_core_v1_api):
    """Combined fixture for creating a Cluster instance without cluster access."""
    return {
        "contexts": mock_kube_contexts,
        "config": mock_kube_config,
        "core_api": mock_core_v1_api,
    }


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for kubectl execution."""
    with patch("subprocess.run") as mock:
        mock.return_value = MagicMock(returncode=0, stdout='{"items": []}', stderr="")
        yield mock
