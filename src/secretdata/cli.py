#!/usr/bin/env python
"""Command-line interface for kubectl-secretdata.

This module provides the main CLI entry point, handling command-line
argument parsing and printing the decoded secrets.
"""

import sys

import click
from click.core import ParameterSource
from icecream import ic

from secretdata import __version__, console
from secretdata.core.finder import SecretFinder
from secretdata.exceptions import SecretDataError
from secretdata.secrets.selection import resolve_namespace_selection
from secretdata.settings import DEFAULT_WORKERS, Settings

_EPILOG = """\b
Examples:
  # List all secrets in json format
  kubectl secretdata -A -o json

  # List secrets in the given namespaces (yaml by default)
  kubectl secretdata -m "ns1,ns2,ns3"

  # List secrets whose name matches a regex in one namespace
  kubectl secretdata -n ns1 --regex "^secret[0-9]"

  # List secrets matching a label selector across all namespaces
  kubectl secretdata -A --selector "key1=value1,key2=value2"
"""


@click.command(
    help="Display decoded secret data. You only see results for the namespaces you select "
    "with --namespace, --all-namespaces or --multi-namespaces.",
    epilog=_EPILOG,
)
@click.argument("name", required=False)
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--namespace", "-n", required=False, help="namespace where secrets exist")
@click.option("--all-namespaces", "-A", required=False, is_flag=True, help="find secrets in all namespaces")
@click.option("--multi-namespaces", "-m", required=False, help='namespaces separated by ","')
@click.option("--output", "-o", required=False, default="yaml", show_default=True, help="output format: json or yaml")
@click.option("--regex", required=False, help="regular expression for secret names")
@click.option("--selector", "-l", required=False, help="label selector, e.g. key1=value1,key2!=value2")
@click.option("--backend", required=False, default="api", show_default=True, help="api or kubectl")
@click.option("--kubeconfig", required=False, help="path to the kubeconfig file")
@click.option("--context", required=False, help="kubeconfig context to use")
@click.option("--select", required=False, is_flag=True, default=False, help="prompt for context select")
@click.option(
    "--workers", required=False, type=int, default=DEFAULT_WORKERS, show_default=True, help="concurrent namespace requests"
)
@click.option("--timeout", required=False, type=float, help="abort after this many seconds")
@click.pass_context
def cli(
    ctx: click.Context,
    name: str | None,
    version: bool,
    debug: bool,
    namespace: str | None,
    all_namespaces: bool,
    multi_namespaces: str | None,
    output: str,
    regex: str | None,
    selector: str | None,
    backend: str,
    kubeconfig: str | None,
    context: str | None,
    select: bool,
    workers: int,
    timeout: float | None,
) -> None:
    """Process CLI arguments and print the decoded secrets.

    Args:
        ctx: The click context.
        name: Optional secret name.
        version: Print version and exit.
        debug: Enable debug output.
        namespace: Single namespace to search.
        all_namespaces: Search every namespace.
        multi_namespaces: Comma-separated namespaces to search.
        output: Output format.
        regex: Secret name pattern.
        selector: Label selector.
        backend: Fetch backend (api or kubectl).
        kubeconfig: Path to the kubeconfig file.
        context: Kubeconfig context.
        select: Prompt for Kubernetes context selection.
        workers: Number of concurrent namespace requests.
        timeout: Overall deadline in seconds.

    """
    if not debug:
        ic.disable()

    if version:
        click.echo(__version__)
        return

    try:
        settings = Settings.from_options(
            output=output,
            regex=regex,
            label_selector=selector,
            backend=backend,
            kubeconfig=kubeconfig,
            context=context,
            select_context=select,
            workers=workers,
            timeout=timeout,
        )
        selection = resolve_namespace_selection(
            namespace,
            all_namespaces,
            multi_namespaces,
            namespace_explicit=ctx.get_parameter_source("namespace") is ParameterSource.COMMANDLINE,
        )
        ic(settings)

        with SecretFinder(settings) as finder:
            rendered = finder.run(selection, name=name)
    except SecretDataError as e:
        console.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        # SecretFinder.__exit__ has already cancelled the fetch context
        console.error("fetch cancelled: interrupted")
        sys.exit(1)

    click.echo(rendered, nl=False)


if __name__ == "__main__":
    cli()
