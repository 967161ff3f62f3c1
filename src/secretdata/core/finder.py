"""SecretFinder facade.

This module provides the SecretFinder class, the main entry point for a
lookup. It builds the fetch collaborator from Settings and drives the
fetcher, the aggregator and the renderer for one invocation.
"""

from icecream import ic

from secretdata import console
from secretdata.cluster import Cluster
from secretdata.kubectl import Kubectl
from secretdata.models import Backend, FilterSpec, NamespaceSelection, ResultSet
from secretdata.output import render
from secretdata.secrets.aggregation import aggregate_secrets
from secretdata.secrets.fetching import FetchContext, SecretClient, SecretFetcher
from secretdata.settings import Settings


class SecretFinder:
    """Finds, decodes and renders secrets for a single invocation.

    Attributes:
        settings: The options of this invocation.
        context: Cancellation/deadline context shared by all requests.
        client: The fetch collaborator.
        fetcher: SecretFetcher bound to ``client`` and ``context``.

    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: SecretClient | None = None,
        context: FetchContext | None = None,
    ) -> None:
        """Initialize SecretFinder.

        Args:
            settings: The options of this invocation.
            client: Fetch collaborator to use instead of the one selected
                by ``settings.backend``.
            context: Cancellation context to use instead of a fresh one
                built from ``settings.timeout``.

        """
        self.settings = settings
        self.context = context or FetchContext(timeout=settings.timeout)
        self.client: SecretClient = client if client is not None else self._build_client()
        self.fetcher = SecretFetcher(self.client, workers=settings.workers, context=self.context)

    def __enter__(self) -> "SecretFinder":
        """Enter context manager.

        Returns:
            The SecretFinder instance.

        """
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object) -> None:
        """Exit context manager, cancelling outstanding requests on error.

        Args:
            exc_type: Exception type if an exception was raised.
            exc_val: Exception value if an exception was raised.
            exc_tb: Exception traceback if an exception was raised.

        """
        if exc_type is not None:
            self.context.cancel()

    def __repr__(self) -> str:
        """Return a detailed string representation for debugging."""
        return f"SecretFinder(client={self.client!r}, output={self.settings.output.value!r})"

    def _build_client(self) -> SecretClient:
        match self.settings.backend:
            case Backend.KUBECTL:
                return Kubectl(
                    self.settings.kubectl_command,
                    kubeconfig=self.settings.kubeconfig,
                    context=self.settings.context,
                )
            case Backend.API:
                return Cluster(
                    select_context=self.settings.select_context,
                    context=self.settings.context,
                    kubeconfig=self.settings.kubeconfig,
                )
        raise ValueError(f"Unsupported backend: {self.settings.backend}")

    def find(self, selection: NamespaceSelection, name: str | None = None) -> ResultSet:
        """Build the result set for a selection.

        Args:
            selection: The resolved namespace selection.
            name: Optional secret name. With several namespaces it is
                looked up in each of them.

        Returns:
            Mapping of namespace -> secret name -> decoded data.

        """
        spec = FilterSpec(
            pattern=self.settings.pattern,
            selection=selection,
            label_selector=self.settings.label_selector,
        )
        ic(spec, name)

        records = self.fetcher.fetch(selection, name=name, label_selector=spec.label_selector)
        with console.spinner("Fetching secrets..."):
            result = aggregate_secrets(records, spec)

        count = sum(len(secrets) for secrets in result.values())
        console.success(f"Found {count} secret(s) in {len(result)} namespace(s)")
        return result

    def run(self, selection: NamespaceSelection, name: str | None = None) -> str:
        """Find secrets and render them in the configured format.

        Args:
            selection: The resolved namespace selection.
            name: Optional secret name.

        Returns:
            The rendered output.

        """
        return render(self.find(selection, name), self.settings.output)
