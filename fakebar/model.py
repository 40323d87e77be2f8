"""
Data model of the fake bar search.

Bars are identified by their sequential number (0..N-1). A group is a sorted
tuple of bars put on one bowl of the scale.
"""

from dataclasses import dataclass, field
import enum
import typing

from fakebar.errors import InvariantViolation

Item = int
Group = typing.Tuple[Item, ...]


class ComparisonOutcome(enum.Enum):
    """Result of a single weighing. The scale never reports a magnitude."""

    LEFT_HEAVIER = "left heavier"
    RIGHT_HEAVIER = "right heavier"
    EQUAL = "equal"


class Polarity(enum.Enum):
    """Defines which bowl of an unbalanced weighing holds the fake bar."""

    # The fake bar weighs more than the genuine ones.
    HEAVIER = "heavier"
    # The fake bar weighs less than the genuine ones.
    LIGHTER = "lighter"


class Verdict(enum.Enum):
    """Answer of the scale to the bar selected as fake."""

    VERIFIED = "verified"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Weighing:
    """A single entry of the weighing log."""

    left: Group
    right: Group
    outcome: ComparisonOutcome

    def __str__(self):
        return f"{list(self.left)} vs {list(self.right)}: {self.outcome.value}"


@dataclass(frozen=True)
class Query:
    """Two groups the solver wants to put on the scale next."""

    left: Group
    right: Group


@dataclass(frozen=True)
class Done:
    """The solver narrowed the candidates to a single bar."""

    item: Item


def make_group(items: typing.Iterable[Item]) -> Group:
    """Returns the group normalized to a sorted tuple."""
    return tuple(sorted(items))


@dataclass
class SearchState:
    """
    Candidates still possibly fake and the weighings that narrowed them.

    The state belongs to a single search session. Use start() to create it
    with the full candidate set and record() after every weighing.
    """

    bar_count: int
    polarity: Polarity = Polarity.HEAVIER
    candidates: typing.List[Item] = field(default_factory=list)
    log: typing.List[Weighing] = field(default_factory=list)

    @staticmethod
    def start(bar_count: int, polarity: Polarity = Polarity.HEAVIER):
        """Creates the state of a fresh search over bar_count bars."""
        if bar_count < 1:
            raise InvariantViolation(f"Cannot search among {bar_count} bars")
        return SearchState(bar_count, polarity, list(range(bar_count)))

    def _validate(self, left: Group, right: Group):
        if not left or not right:
            raise InvariantViolation(
                f"Both bowls must hold bars (left: {list(left)}, right: {list(right)})"
            )
        if len(left) != len(right):
            raise InvariantViolation(
                f"Bowls hold different numbers of bars ({len(left)} vs {len(right)})"
            )
        if set(left) & set(right):
            raise InvariantViolation(
                f"Bars {sorted(set(left) & set(right))} are on both bowls"
            )
        unknown = [i for i in left + right if not 0 <= i < self.bar_count]
        if unknown:
            raise InvariantViolation(f"Unknown bars {unknown}")

    def record(self, left, right, outcome: ComparisonOutcome):
        """
        Appends the weighing to the log and narrows the candidates.

        Parameters
        ----------
        left : Iterable[int]
            Bars on the left bowl.
        right : Iterable[int]
            Bars on the right bowl.
        outcome : ComparisonOutcome
            Result shown by the scale.

        Raises
        ------
        InvariantViolation
            The groups are malformed or the outcome contradicts the earlier
            weighings (no candidate would survive). The candidates are not
            changed in the latter case but the weighing is still logged.
        """
        left = make_group(left)
        right = make_group(right)
        self._validate(left, right)
        self.log.append(Weighing(left, right, outcome))

        if outcome == ComparisonOutcome.EQUAL:
            suspects = set(self.candidates) - set(left) - set(right)
        else:
            left_is_suspect = (outcome == ComparisonOutcome.LEFT_HEAVIER) == (
                self.polarity == Polarity.HEAVIER
            )
            suspects = set(self.candidates) & set(left if left_is_suspect else right)

        if not suspects:
            raise InvariantViolation(
                f"No candidate out of {self.candidates} is consistent with the "
                f"weighing {self.log[-1]}"
            )
        self.candidates = sorted(suspects)
