"""
Order number normalization utilities.

Shopify labels the same order as ``#1001`` on the order, ``#1001.1`` on its
first fulfillment, and customers type ``1001``. All of them map to one key.
"""

import re

# Fulfillment sequence suffix, e.g. ".1" in "#1001.1"
FULFILLMENT_SUFFIX_PATTERN = re.compile(r"\.[0-9]+\Z")


def _strip_once(value: str) -> str:
    if value.startswith("#"):
        value = value[1:]
    return FULFILLMENT_SUFFIX_PATTERN.sub("", value)


def normalize_order_number(raw: str) -> str:
    """
    Normalize an order label to its canonical order key.

    Removes one leading ``#`` and a trailing ``.<digits>`` fulfillment suffix.
    The step is repeated until the value is stable so the function is
    idempotent for inputs such as ``##1001`` or ``1001.1.2``. No case folding
    or whitespace trimming is applied.

    Args:
        raw: Order label from a webhook payload or a customer query

    Returns:
        Canonical order key

    Examples:
        >>> normalize_order_number("#1001.2")
        '1001'
        >>> normalize_order_number("1001")
        '1001'
    """
    value = raw
    while True:
        stripped = _strip_once(value)
        if stripped == value:
            return value
        value = stripped


def display_order_number(raw: str) -> str:
    """Human-facing label for an order: the key with exactly one leading ``#``."""
    return f"#{normalize_order_number(raw)}"
