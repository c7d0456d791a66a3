"""Interface adapters exposing the notification engine."""
