"""Affirmation text shown after a check-in."""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable

from attendance_rewards.domain import ArrivalTier


@runtime_checkable
class AffirmationProvider(Protocol):
    """Maps an arrival tier to display text."""

    def pick(self, tier: ArrivalTier) -> str:
        ...


DEFAULT_QUOTES: Mapping[ArrivalTier, Sequence[str]] = {
    ArrivalTier.EARLY: (
        "Excellence is not a skill, it's an attitude. Your early arrival shows "
        "you've already chosen excellence. (Ralph Marston)",
        "Success is where preparation and opportunity meet. (Bobby Unser)",
        "Success is the sum of small efforts repeated day in and day out. "
        "(Robert Collier)",
    ),
    ArrivalTier.ON_TIME: (
        "Punctuality is the soul of business. (Thomas Chandler Haliburton)",
        "Being on time is a sign of respect, for others and for yourself.",
        "Consistency is what transforms average into excellence.",
    ),
    ArrivalTier.LATE: (
        "Every day is a new beginning. Take a deep breath and start again.",
        "It does not matter how slowly you go as long as you do not stop. "
        "(Confucius)",
        "Tomorrow is another chance to be early.",
    ),
}


class QuoteAffirmationProvider:
    """Picks a random quote for the tier."""

    def __init__(
        self,
        quotes: Mapping[ArrivalTier, Sequence[str]] = DEFAULT_QUOTES,
        rng: random.Random | None = None,
    ):
        missing = [tier.value for tier in ArrivalTier if not quotes.get(tier)]
        if missing:
            raise ValueError(f"No quotes configured for tiers: {', '.join(missing)}")
        self.quotes = quotes
        self.rng = rng or random.Random()

    def pick(self, tier: ArrivalTier) -> str:
        return self.rng.choice(list(self.quotes[tier]))
