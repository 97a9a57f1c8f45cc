"""Tomato Log - Pomodoro interval tracking with a persistent history."""

__version__ = "0.1.0"
