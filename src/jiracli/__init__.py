"""Jira command-line client with worklog reports."""

__version__ = "0.1.0"
