"""Maps domain errors to user-facing CLI failures."""

from __future__ import annotations

import click

from shopbot.domain.exceptions import DomainException, ErrorCategory

GUIDANCE = {
    ErrorCategory.INVALID_INPUT: "Check the values you entered.",
    ErrorCategory.NOT_FOUND: "Run 'shopbot browse' to see what is on sale.",
    ErrorCategory.REDUCE_QUANTITY: "Reduce the quantity and try again.",
    ErrorCategory.ITEM_REMOVED: "Remove the item from your cart and try again.",
    ErrorCategory.NOTHING_TO_DO: "Nothing to do.",
    ErrorCategory.TRY_AGAIN_LATER: "Please try again later.",
}


def fail(exc: DomainException) -> click.ClickException:
    return click.ClickException(f"{exc} ({GUIDANCE[exc.category]})")
