"""Reporting contract shared by every finished optimizer."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Report(Protocol):
    """
    Implemented only by the Ready side of each optimizer.

    Pending optimizers have no ``report`` method, so asking one for a report
    before its search has run fails type checking.
    """

    def report(self) -> str: ...


def render_report(result: Report) -> str:
    """Return the printable summary of a finished search."""
    return result.report()
