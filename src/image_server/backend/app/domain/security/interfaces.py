from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class RateLimiter(Protocol):
    def allow(self, client_key: str) -> bool:
        ...

    def hit(self, client_key: str) -> RateLimitDecision:
        ...
