#!/usr/bin/env python3
"""Main entrypoint for jira-cli."""

from jiracli.cli.app import app


def main() -> None:
    """Main entry point."""
    app(prog_name="jira-cli")


if __name__ == "__main__":
    main()
