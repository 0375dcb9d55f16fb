"""taskpad: single-user task manager with a validated, observable task store."""

__version__ = "0.1.0"
