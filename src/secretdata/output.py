"""Rendering of the aggregated result set."""

import json

import yaml

from secretdata.models import OutputFormat, ResultSet


def render(result: ResultSet, output: OutputFormat) -> str:
    """Serialize the result set.

    Keys are sorted at every level so the output is deterministic.
    Secrets without data are rendered as ``null``.

    Args:
        result: Mapping of namespace -> secret name -> decoded data.
        output: The format to render in.

    Returns:
        The rendered text, ending with a newline.

    """
    match output:
        case OutputFormat.JSON:
            return json.dumps(result, indent=4, sort_keys=True, ensure_ascii=False) + "\n"
        case OutputFormat.YAML:
            return yaml.safe_dump(result, default_flow_style=False, sort_keys=True, allow_unicode=True)
    raise ValueError(f"Unsupported output format: {output}")
