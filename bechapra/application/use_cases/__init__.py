"""Aggregate application use cases."""

from .notifications import build_action_logger, build_notification_dispatcher

__all__ = ["build_action_logger", "build_notification_dispatcher"]
