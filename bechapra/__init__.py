"""Bechapra expense approval backend: notification fan-out and addressing."""
