from fakebar.errors import (
    AnswerRejected,
    FakeBarError,
    InvariantViolation,
    TransportTimeout,
    UnrecognizedSignal,
)
from fakebar.model import (
    ComparisonOutcome,
    Done,
    Polarity,
    Query,
    SearchState,
    Verdict,
    Weighing,
)
from fakebar.oracle import ComparatorOracleClient, OracleState, ScaleTransport
from fakebar.session import SearchReport, SearchSession
from fakebar.solver import max_weighings, next_query, solve


__all__ = [
    "AnswerRejected",
    "FakeBarError",
    "InvariantViolation",
    "TransportTimeout",
    "UnrecognizedSignal",
    "ComparisonOutcome",
    "Done",
    "Polarity",
    "Query",
    "SearchState",
    "Verdict",
    "Weighing",
    "ComparatorOracleClient",
    "OracleState",
    "ScaleTransport",
    "SearchReport",
    "SearchSession",
    "max_weighings",
    "next_query",
    "solve",
]
