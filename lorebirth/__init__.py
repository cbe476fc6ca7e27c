"""Dice, roll tables and random generators for role-playing character backgrounds."""

__version__ = "0.1.3"