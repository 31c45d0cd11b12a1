"""List the people who recently committed to a GitHub organization's repositories."""

__version__ = "0.1.0"
