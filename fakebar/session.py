"""One complete search for the fake bar on one scale."""

from dataclasses import dataclass
import typing

from fakebar.errors import AnswerRejected, FakeBarError
from fakebar.model import Item, Polarity, SearchState, Verdict, Weighing
from fakebar.oracle import ComparatorOracleClient, OracleState
from fakebar.solver import solve
from fakebar.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class SearchReport:
    """Outcome of a successful search."""

    item: Item
    verdict: Verdict
    weighings: typing.Tuple[Weighing, ...]


class SearchSession:
    """
    Searches for the fake bar using the given oracle client and commits the
    answer. The client (and its scale) must not be used by another session.

    Leaving the context manager before the answer is committed resets the
    scale.
    """

    def __init__(
        self,
        client: ComparatorOracleClient,
        bar_count: int,
        polarity: Polarity = Polarity.HEAVIER,
    ):
        self._client = client
        self._bar_count = bar_count
        self._polarity = polarity
        self._state: typing.Optional[SearchState] = None

    @property
    def weighings(self) -> typing.Tuple[Weighing, ...]:
        """Weighings performed so far."""
        if self._state is None:
            return ()
        return tuple(self._state.log)

    def run(self) -> SearchReport:
        """
        Finds the fake bar and verifies it on the scale.

        Raises
        ------
        AnswerRejected
            The scale rejected the answer.
        FakeBarError
            Any other fault. The weighings performed before the fault are
            available in its weighings attribute.
        """
        try:
            self._state = SearchState.start(self._bar_count, self._polarity)
            done = solve(self._state, self._client.compare)
            verdict = self._client.commit(done.item)
            if verdict == Verdict.REJECTED:
                raise AnswerRejected(f"Bar {done.item} is not the fake one", done.item)
        except FakeBarError as ex:
            ex.weighings = self.weighings
            logger.info(
                "Search failed after %d weighing(s): %s", len(ex.weighings), ex
            )
            raise
        return SearchReport(done.item, verdict, self.weighings)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self._client.state in (OracleState.IDLE, OracleState.COMMITTED):
            return
        if exc_type is None:
            self._client.reset()
            return
        try:
            self._client.reset()
        except FakeBarError as ex:
            logger.warning("Could not reset the scale after %s: %s", exc_type, ex)
