"""Notification backends."""

from __future__ import annotations

from dataclasses import dataclass, field


class Notifier:
    def notify(self, event: str, message: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


@dataclass
class LogNotifier(Notifier):
    """Prints events; ``muted`` drops noisy event codes such as per-run blowups."""

    prefix: str = "[PROP-SIM]"
    muted: frozenset[str] = frozenset()

    def notify(self, event: str, message: str) -> None:
        if event in self.muted:
            return
        print(f"{self.prefix} {event}: {message}")


@dataclass
class MemoryNotifier(Notifier):
    events: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, event: str, message: str) -> None:
        self.events.append((event, message))

    def codes(self) -> list[str]:
        return [event for event, _ in self.events]
