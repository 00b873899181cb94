"""Task Timer - a todo list paired with a pomodoro countdown."""

__version__ = "0.1.0"
