"""Shared utilities: logging, factories, enumerations and timers."""
