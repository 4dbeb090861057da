"""Timekeeper: time accounting and reporting for employee work shifts."""

__version__ = "1.0.0"
