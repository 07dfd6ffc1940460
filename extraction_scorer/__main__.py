#!/usr/bin/env python3
"""
Main entry point for the extraction scorer application.
"""

import sys
import click
from .cli.commands import cli


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
