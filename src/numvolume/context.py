from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineCtx:
    # Sieve tables for 0..max_n; immutable and safe to share between callers
    max_n: int
    is_prime: tuple[bool, ...]       # is_prime[i] for 0 <= i <= max_n
    prime_count: tuple[int, ...]     # number of primes <= i

    def covers(self, magnitude: int) -> bool:
        return 0 <= magnitude <= self.max_n

    def check(self, magnitude: int) -> int:
        """Return magnitude, or raise OutOfRangeError if the sieve does not reach it."""
        from numvolume.utility import OutOfRangeError

        if not self.covers(magnitude):
            raise OutOfRangeError(
                f"|n| = {magnitude} is outside the sieve range 0..{self.max_n}. "
                "Raise MAX_N in the profile or pass a smaller value."
            )
        return magnitude

    def prime(self, magnitude: int) -> bool:
        return self.is_prime[self.check(magnitude)]

    def pi(self, magnitude: int) -> int:
        return self.prime_count[self.check(magnitude)]
