from __future__ import annotations

from collections import defaultdict
from typing import Protocol, runtime_checkable

from .models import Verdict, VoteCounts


@runtime_checkable
class VoteLedgerReader(Protocol):
    def get_vote_counts(self, item_id: str) -> VoteCounts: ...


class InMemoryVoteLedger:
    """Vote tallies per item, standing in for the on-chain voting contract."""

    def __init__(self) -> None:
        self._tallies: dict[str, dict[Verdict, int]] = defaultdict(
            lambda: {Verdict.REAL: 0, Verdict.FAKE: 0, Verdict.UNCERTAIN: 0}
        )

    def record_vote(self, item_id: str, verdict: Verdict) -> VoteCounts:
        verdict = Verdict(verdict)
        if verdict is Verdict.PENDING:
            raise ValueError("cannot vote Pending")
        self._tallies[item_id][verdict] += 1
        return self.get_vote_counts(item_id)

    def get_vote_counts(self, item_id: str) -> VoteCounts:
        tally = self._tallies.get(item_id)
        if tally is None:
            return VoteCounts()
        return VoteCounts.from_tally(
            real=tally[Verdict.REAL],
            fake=tally[Verdict.FAKE],
            uncertain=tally[Verdict.UNCERTAIN],
        )
