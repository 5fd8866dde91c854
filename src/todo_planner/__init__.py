# src/todo_planner/__init__.py

"""Personal task-list service with recurring due dates."""

__version__ = "0.1.0"
