"""Result of a single delivery attempt on a notification channel."""

from __future__ import annotations

from dataclasses import dataclass

CHANNEL_PUSH = "push"
CHANNEL_EMAIL = "email"


@dataclass(frozen=True)
class ChannelResult:
    """Outcome of handing a notification to one channel for one recipient."""

    channel: str
    delivered: bool
    skipped: bool = False
    error: str | None = None

    @classmethod
    def sent(cls, channel: str) -> "ChannelResult":
        return cls(channel=channel, delivered=True)

    @classmethod
    def skip(cls, channel: str, reason: str | None = None) -> "ChannelResult":
        return cls(channel=channel, delivered=False, skipped=True, error=reason)

    @classmethod
    def failed(cls, channel: str, error: str) -> "ChannelResult":
        return cls(channel=channel, delivered=False, error=error)


__all__ = ["CHANNEL_EMAIL", "CHANNEL_PUSH", "ChannelResult"]
