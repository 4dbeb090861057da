"""Shared helpers: display formatting and structured logging."""
