"""
Ternary elimination search for the single fake bar.

Every weighing splits the surviving candidates into three parts: two bowls of
ceil(n/3) bars each and the bars left out. Whatever the scale shows, at most
ceil(n/3) candidates survive, so N bars need at most ceil(log3(N)) weighings.
"""

import typing

from fakebar.errors import InvariantViolation
from fakebar.model import (
    ComparisonOutcome,
    Done,
    Group,
    Query,
    SearchState,
)
from fakebar.utils import setup_logger

logger = setup_logger(__name__)

Comparator = typing.Callable[[Group, Group], ComparisonOutcome]


def max_weighings(bar_count: int) -> int:
    """Returns ceil(log3(bar_count)), the worst-case number of weighings."""
    if bar_count < 1:
        raise InvariantViolation(f"Cannot search among {bar_count} bars")
    weighings = 0
    covered = 1
    while covered < bar_count:
        covered *= 3
        weighings += 1
    return weighings


def next_query(state: SearchState) -> typing.Union[Query, Done]:
    """
    Decides what to put on the scale next.

    The function is pure: it only reads the state and returns the same
    answer for the same state.

    Returns
    -------
    Query | Done
        The bowls for the next weighing or the fake bar if a single
        candidate survived.

    Raises
    ------
    InvariantViolation
        No candidates survived.
    """
    candidates = sorted(state.candidates)
    if not candidates:
        raise InvariantViolation("No candidates left; the fake bar cannot be found")
    if len(candidates) == 1:
        return Done(candidates[0])

    bowl_size = (len(candidates) + 2) // 3
    left = tuple(candidates[:bowl_size])
    right = tuple(candidates[bowl_size : 2 * bowl_size])
    if not left or not right:
        raise InvariantViolation(f"Cannot split candidates {candidates} into bowls")
    return Query(left, right)


def solve(state: SearchState, compare: Comparator) -> Done:
    """
    Runs the search to the end using the given comparator.

    Parameters
    ----------
    state : SearchState
        State of the search; updated with every weighing.
    compare : Callable[[Group, Group], ComparisonOutcome]
        Puts the two groups on the scale and returns the outcome.

    Returns
    -------
    Done
        The fake bar.
    """
    # Bound the weighings issued here by the candidates still in play.
    limit = len(state.log) + max_weighings(max(len(state.candidates), 1))
    while True:
        step = next_query(state)
        if isinstance(step, Done):
            logger.info(
                "Fake bar is %d after %d weighing(s)", step.item, len(state.log)
            )
            return step
        if len(state.log) >= limit:
            raise InvariantViolation(
                f"Search among {state.bar_count} bars exceeded {limit} weighings"
            )
        outcome = compare(step.left, step.right)
        state.record(step.left, step.right, outcome)
