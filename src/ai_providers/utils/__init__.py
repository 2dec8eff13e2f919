"""Shared utilities: settings and logging setup."""
