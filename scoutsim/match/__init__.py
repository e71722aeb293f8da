"""Fixture simulation: scorelines, ratings and tactical matchups."""
