"""Infrastructure layer: persistence, email and realtime delivery."""
