"""
Comparator oracle client.

Turns "compare these two groups" into the interaction sequence the scale
needs: fill the bowls, press Weigh, wait for the result glyph, and reset the
bowls before the next weighing. The scale is stateful and slow, so every wait
is bounded and a timed out weighing is repeated from a clean scale.
"""

import enum
import typing

from fakebar import constants
from fakebar.constants import RetryPolicy
from fakebar.errors import InvariantViolation, TransportTimeout, UnrecognizedSignal
from fakebar.model import ComparisonOutcome, Item, Verdict, make_group
from fakebar.utils import setup_logger, wait_for_success

logger = setup_logger(__name__)


class ScaleTransport(typing.Protocol):
    """
    Minimal set of scale operations the client relies on. The browser page
    object implements it for the live page; tests use in-memory fakes.
    One transport instance is one scale and must not be shared by sessions.
    """

    def submit_groups(
        self, left: typing.Sequence[str], right: typing.Sequence[str]
    ) -> None:
        """Fills the bowls and starts the weighing."""

    def await_result(self, timeout_ms: int) -> str:
        """Blocks until the result glyph is shown. Raises TransportTimeout."""

    def reset_trial(self, timeout_ms: int) -> None:
        """Clears the bowls and blocks until the scale is ready for input."""

    def submit_final_answer(self, item: str) -> str:
        """Selects the bar as fake and returns the confirmation message."""


class OracleState(enum.Enum):
    """Lifecycle of the scale as seen by the client."""

    IDLE = "idle"
    INPUT_FILLED = "input filled"
    AWAITING_RESULT = "awaiting result"
    RESULT_READY = "result ready"
    # A wait timed out; the scale content is unknown until the next reset.
    FAULTED = "faulted"
    COMMITTED = "committed"


class ComparatorOracleClient:
    """Weighs groups of bars on a single scale."""

    def __init__(
        self,
        transport: ScaleTransport,
        result_timeout_ms: int = constants.result_timeout_ms,
        reset_timeout_ms: int = constants.reset_timeout_ms,
        retry: typing.Optional[RetryPolicy] = None,
    ):
        """
        A constructor of the class.

        Parameters
        ----------
        transport : ScaleTransport
            Handle of the scale owned by this client for the whole session.
        result_timeout_ms : int, optional
            Bound of a single wait for the result glyph.
        reset_timeout_ms : int, optional
            Bound of a single wait for the reset confirmation.
        retry : RetryPolicy, optional
            Retry policy of timed out weighings, by default read from the
            environment.
        """
        self._transport = transport
        self._result_timeout_ms = result_timeout_ms
        self._reset_timeout_ms = reset_timeout_ms
        self._retry = retry if retry is not None else RetryPolicy.from_env()
        self._state = OracleState.IDLE

    @property
    def state(self) -> OracleState:
        """Current state of the scale."""
        return self._state

    def _ensure_open(self, operation: str):
        if self._state == OracleState.COMMITTED:
            raise InvariantViolation(
                f"Cannot {operation}: the answer has already been committed"
            )

    def compare(self, left, right) -> ComparisonOutcome:
        """
        Weighs the left group against the right one.

        A weighing that times out is repeated according to the retry
        policy, each time after resetting the scale.

        Raises
        ------
        TransportTimeout
            The scale did not respond within the retry policy.
        UnrecognizedSignal
            The scale showed an unknown glyph. It is not retried.
        """
        self._ensure_open("compare")
        left = make_group(left)
        right = make_group(right)

        attempt = wait_for_success(
            TransportTimeout,
            wait_msg=f"Weighing {list(left)} vs {list(right)}...",
            sleep_time=self._retry.sleep_time,
            max_time=None,
            max_tries=self._retry.max_tries,
            backoff=self._retry.backoff,
        )(self._weigh_once)
        try:
            outcome = attempt(left, right)
        except TimeoutError as ex:
            raise TransportTimeout(
                f"Weighing {list(left)} vs {list(right)} failed: {ex}"
            ) from ex
        logger.info("%s vs %s: %s", list(left), list(right), outcome.value)
        return outcome

    def _weigh_once(self, left, right) -> ComparisonOutcome:
        if self._state != OracleState.IDLE:
            self.reset()
        try:
            self._state = OracleState.INPUT_FILLED
            self._transport.submit_groups(
                [str(i) for i in left], [str(i) for i in right]
            )
            self._state = OracleState.AWAITING_RESULT
            glyph = self._transport.await_result(self._result_timeout_ms)
        except TransportTimeout:
            self._state = OracleState.FAULTED
            raise
        self._state = OracleState.RESULT_READY
        return self._decode_result(glyph)

    @staticmethod
    def _decode_result(glyph: str) -> ComparisonOutcome:
        outcome = constants.RESULT_GLYPHS.get(glyph.strip())
        if outcome is None:
            raise UnrecognizedSignal(f"Unknown weighing result {glyph!r}", glyph)
        return outcome

    def reset(self):
        """Clears the scale and waits until it is ready for the next weighing."""
        self._ensure_open("reset")
        try:
            self._transport.reset_trial(self._reset_timeout_ms)
        except TransportTimeout:
            self._state = OracleState.FAULTED
            raise
        self._state = OracleState.IDLE

    def commit(self, item: Item) -> Verdict:
        """
        Selects the bar as fake. This is the only place where the scale
        reveals the truth; no weighing is possible afterwards.

        The answer is submitted once. A timed out confirmation is not
        retried because the bar button may already have been clicked.
        """
        self._ensure_open("commit")
        if self._state not in (OracleState.IDLE, OracleState.RESULT_READY):
            raise InvariantViolation(
                f"Cannot commit while the scale is {self._state.value}"
            )
        try:
            message = self._transport.submit_final_answer(str(item))
        finally:
            self._state = OracleState.COMMITTED
        for fragment, verdict in constants.CONFIRMATION_MESSAGES.items():
            if fragment in message:
                logger.info("Bar %d selected as fake: %s", item, verdict.value)
                return verdict
        raise UnrecognizedSignal(f"Unknown confirmation message {message!r}", message)
