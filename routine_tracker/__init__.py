"""Routine Tracker package."""
