"""Todolist — shared to-do list backend.

Users register and log in, create lists, subscribe each other to lists,
and manage the tasks inside them. Who may touch which list or task is
decided by list membership (subscribers) and task authorship.
"""

__version__ = "0.1.0"
