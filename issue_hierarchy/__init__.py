"""Validate that GitHub issues follow the Theme → User Story → Task → Sub-Task hierarchy."""

__version__ = "0.1.0"
