"""Secret retrieval across namespaces.

The SecretFetcher decides which requests a namespace selection needs and
issues them against a SecretClient, optionally on a small thread pool.
Results are yielded to a single consumer, which is the only code that
builds the result set.
"""

import threading
import time
from collections.abc import Callable, Iterator
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Protocol, TypeVar

from icecream import ic

from secretdata.exceptions import CancelledError, ConfigurationError, FetchError
from secretdata.models import AllNamespaces, MultiNamespaces, NamespaceSelection, SecretRecord, SingleNamespace

T = TypeVar("T")


class SecretClient(Protocol):
    """Collaborator that talks to the cluster.

    Implementations raise FetchError (naming the namespace and secret
    involved) on failure and CancelledError when ``timeout`` elapses.
    """

    def list_secrets(
        self,
        namespace: str,
        *,
        name: str | None = None,
        label_selector: str | None = None,
        timeout: float | None = None,
    ) -> list[SecretRecord]: ...

    def get_secret(self, namespace: str, name: str, *, timeout: float | None = None) -> SecretRecord: ...

    def list_namespaces(self, *, timeout: float | None = None) -> list[str]: ...


class FetchContext:
    """Cancellation and deadline shared by every request of one run.

    Attributes:
        timeout: The overall deadline in seconds, or None.

    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout
        self._deadline: float | None = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Abort the run; requests not yet started will not be issued."""
        self._cancelled.set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def check(self) -> None:
        """Raise CancelledError if the run was cancelled or timed out.

        Raises:
            CancelledError: If the context is no longer active.

        """
        if self._cancelled.is_set():
            raise CancelledError("fetch cancelled")
        if self.expired:
            raise CancelledError(f"fetch timed out after {self.timeout}s")

    def __repr__(self) -> str:
        return f"FetchContext(timeout={self.timeout!r}, cancelled={self._cancelled.is_set()!r})"


class SecretFetcher:
    """Retrieves the secret records a namespace selection asks for.

    Attributes:
        client: The collaborator issuing the actual requests.
        workers: Maximum number of concurrent namespace requests.
        context: Cancellation/deadline context honoured by every request.

    """

    def __init__(self, client: SecretClient, *, workers: int = 1, context: FetchContext | None = None) -> None:
        if workers < 1:
            raise ConfigurationError("workers must be at least 1")
        self.client = client
        self.workers = workers
        self.context = context or FetchContext()

    def __repr__(self) -> str:
        return f"SecretFetcher(client={self.client!r}, workers={self.workers!r})"

    def _call(self, request: Callable[..., T], *args: object, **kwargs: object) -> T:
        """Issue one request under the fetch context.

        Raises:
            CancelledError: If the context is cancelled before, during or
                after the request.

        """
        self.context.check()
        try:
            result = request(*args, timeout=self.context.remaining(), **kwargs)
        except FetchError as err:
            if self.context.cancelled:
                raise CancelledError(f"fetch aborted: {err}") from err
            raise
        # A request that outlived the run must not contribute records.
        self.context.check()
        return result

    def namespaces_for(self, selection: NamespaceSelection) -> list[str]:
        """Resolve the namespaces a selection has to be queried in.

        ``AllNamespaces`` costs a namespace listing request.

        Args:
            selection: The resolved namespace selection.

        Returns:
            Namespace names, in request order.

        """
        match selection:
            case SingleNamespace(name=namespace):
                return [namespace]
            case MultiNamespaces(names=names):
                return list(names)
            case AllNamespaces():
                namespaces: list[str] = self._call(self.client.list_namespaces)
                ic(namespaces)
                return namespaces
        raise TypeError(f"unsupported namespace selection: {selection!r}")

    def fetch(
        self,
        selection: NamespaceSelection,
        name: str | None = None,
        label_selector: str | None = None,
    ) -> Iterator[SecretRecord]:
        """Yield every record the selection and name ask for.

        A named secret in a single namespace is read directly. Otherwise
        one list request is issued per namespace, narrowed to ``name``
        when one is given.

        Args:
            selection: The resolved namespace selection.
            name: Optional secret name.
            label_selector: Optional label query, passed through.

        Yields:
            SecretRecord objects, in no particular order across namespaces.

        Raises:
            ConfigurationError: If both ``name`` and ``label_selector`` are
                given.
            FetchError: If any request fails.
            CancelledError: If the context is cancelled or times out.

        """
        if name and label_selector:
            raise ConfigurationError("a secret name cannot be provided when a selector is specified")

        if name and isinstance(selection, SingleNamespace):
            yield self._call(self.client.get_secret, selection.name, name)
            return

        namespaces = self.namespaces_for(selection)
        if self.workers == 1 or len(namespaces) <= 1:
            for namespace in namespaces:
                yield from self._list(namespace, name, label_selector)
            return

        yield from self._list_concurrently(namespaces, name, label_selector)

    def _list(self, namespace: str, name: str | None, label_selector: str | None) -> list[SecretRecord]:
        return self._call(self.client.list_secrets, namespace, name=name, label_selector=label_selector)

    def _list_concurrently(
        self,
        namespaces: list[str],
        name: str | None,
        label_selector: str | None,
    ) -> Iterator[SecretRecord]:
        """Fan namespace requests out to a bounded pool.

        Completed results are handed back to the calling thread one batch
        at a time. The first failure cancels all requests not yet started.
        """
        pool = ThreadPoolExecutor(
            max_workers=min(self.workers, len(namespaces)),
            thread_name_prefix="secretdata-fetch",
        )
        pending: set[Future[list[SecretRecord]]] = {
            pool.submit(self._list, namespace, name, label_selector) for namespace in namespaces
        }
        try:
            while pending:
                done, pending = wait(pending, timeout=self.context.remaining(), return_when=FIRST_COMPLETED)
                if not done:
                    self.context.check()
                    continue
                for future in done:
                    records = future.result()
                    self.context.check()
                    yield from records
        finally:
            pool.shutdown(wait=False, cancel_futures=True)
