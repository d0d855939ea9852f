"""Command line interface for gitflow-changelog."""
