"""Breach-database lookup capability."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class BreachChecker(Protocol):
    """Answers whether a plain text password appears in a known breach."""

    async def is_breached(self, password: str) -> bool:
        ...


class NullBreachChecker:
    """Default checker: no breach database configured, nothing is breached."""

    async def is_breached(self, password: str) -> bool:
        return False
