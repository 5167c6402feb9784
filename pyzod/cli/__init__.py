"""CLI interface for pyzod.

This package provides command-line access to the issue pipeline: loading raw
issues from JSON or YAML files, finalizing them under a locale and rendering
them with one of the four projections.
"""
