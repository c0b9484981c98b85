# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Exponential backoff with jitter for reconnection."""

import random
from dataclasses import dataclass


@dataclass
class BackoffConfig:
    """Configuration for reconnect backoff.

    Attributes:
        base_delay: Delay in seconds before the first reconnect attempt (default: 1.0)
        backoff_factor: Exponential multiplier per attempt (default: 2.0)
        max_delay: Cap for any single delay in seconds (default: 30.0)
        jitter: Fraction of the delay applied as +/- random jitter (default: 0.2)
    """
    base_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 30.0
    jitter: float = 0.2


class BackoffPolicy:
    """Computes reconnect delays.

    Delay for attempt n (1-indexed) is base_delay * backoff_factor ** (n - 1),
    capped at max_delay, then jittered by +/- jitter to avoid reconnection storms
    when many subscribers lose the same server.
    """

    def __init__(self, config: BackoffConfig | None = None, rng: random.Random | None = None):
        """Initialize backoff policy.

        Args:
            config: Backoff configuration (uses defaults if None)
            rng: Random source, injectable for deterministic tests
        """
        self.config = config or BackoffConfig()
        self._rng = rng or random.Random()

    def calculate_delay(self, attempt_number: int) -> float:
        """Calculate the delay before the given reconnect attempt.

        Args:
            attempt_number: Consecutive attempt number (1-indexed)

        Returns:
            Delay in seconds, never negative
        """
        if attempt_number < 1:
            return 0.0

        delay = self.config.base_delay * (self.config.backoff_factor ** (attempt_number - 1))
        delay = min(delay, self.config.max_delay)

        if self.config.jitter:
            delay += delay * self.config.jitter * (self._rng.random() * 2 - 1)

        return max(0.0, delay)
