"""Per-invocation configuration.

Settings are built once from command-line options and the environment
and passed explicitly to whatever needs them.
"""

import os
import re
from dataclasses import dataclass

from secretdata.exceptions import ConfigurationError
from secretdata.models import Backend, OutputFormat

DEFAULT_PATTERN = ".*"
DEFAULT_WORKERS = 1
MAX_WORKERS = 16

# Environment variable overriding the kubectl binary
KUBECTL_COMMAND_ENV = "KUBECTL_COMMAND"


@dataclass(frozen=True, slots=True)
class Settings:
    """Options controlling a single run.

    Attributes:
        output: Format the result set is rendered in.
        pattern: Compiled secret name pattern.
        label_selector: Label query passed through to the cluster.
        backend: Which fetch collaborator to use.
        kubeconfig: Path to a kubeconfig file, or None for the default.
        context: Kubeconfig context name, or None for the current one.
        select_context: Prompt for the context interactively.
        kubectl_command: Binary used by the kubectl backend.
        workers: Number of concurrent namespace fetches.
        timeout: Overall deadline in seconds, or None for no deadline.

    """

    output: OutputFormat = OutputFormat.YAML
    pattern: re.Pattern[str] = re.compile(DEFAULT_PATTERN)
    label_selector: str | None = None
    backend: Backend = Backend.API
    kubeconfig: str | None = None
    context: str | None = None
    select_context: bool = False
    kubectl_command: str = "kubectl"
    workers: int = DEFAULT_WORKERS
    timeout: float | None = None

    @classmethod
    def from_options(
        cls,
        *,
        output: str = OutputFormat.YAML.value,
        regex: str | None = None,
        label_selector: str | None = None,
        backend: str = Backend.API.value,
        kubeconfig: str | None = None,
        context: str | None = None,
        select_context: bool = False,
        workers: int = DEFAULT_WORKERS,
        timeout: float | None = None,
    ) -> "Settings":
        """Validate raw option values and build Settings.

        Raises:
            ConfigurationError: If any option value is invalid.

        """
        try:
            output_format = OutputFormat(output)
        except ValueError:
            raise ConfigurationError(f'{output} is invalid: --output must be "yaml", or "json"') from None

        try:
            pattern = re.compile(regex or DEFAULT_PATTERN)
        except re.error as e:
            raise ConfigurationError(f"Invalid --regex {regex!r}: {e}") from e

        try:
            backend_kind = Backend(backend)
        except ValueError:
            raise ConfigurationError(f'{backend} is invalid: --backend must be "api", or "kubectl"') from None

        if not 1 <= workers <= MAX_WORKERS:
            raise ConfigurationError(f"--workers must be between 1 and {MAX_WORKERS}")

        if timeout is not None and timeout <= 0:
            raise ConfigurationError("--timeout must be a positive number of seconds")

        if select_context and context:
            raise ConfigurationError("--select and --context are mutually exclusive")
        if select_context and backend_kind is Backend.KUBECTL:
            raise ConfigurationError("--select is only supported with --backend api")

        return cls(
            output=output_format,
            pattern=pattern,
            label_selector=label_selector or None,
            backend=backend_kind,
            kubeconfig=kubeconfig,
            context=context,
            select_context=select_context,
            kubectl_command=os.environ.get(KUBECTL_COMMAND_ENV) or "kubectl",
            workers=workers,
            timeout=timeout,
        )
