"""Look and choices of the interactive kubeconfig context picker."""

from questionary import Choice, Style

# Same cyan accents as the rich console theme
PROMPT_STYLE = Style(
    [
        ("qmark", "fg:#00afaf bold"),
        ("question", "bold"),
        ("pointer", "fg:#00d7d7 bold"),
        ("highlighted", "fg:#00d7d7 bold"),
        ("answer", "fg:#00d7d7"),
        ("instruction", "fg:#808080"),
    ]
)

POINTER = "› "
QMARK = "⎈ "
CURRENT_SUFFIX = " (current)"


def context_choices(names: list[str], current: str | None) -> list[Choice]:
    """Build picker entries for kubeconfig contexts.

    Args:
        names: Context names in kubeconfig order.
        current: The kubeconfig's current context, labelled in the list.

    Returns:
        One Choice per context whose value is the bare context name.

    """
    return [Choice(title=name + CURRENT_SUFFIX if name == current else name, value=name) for name in names]
