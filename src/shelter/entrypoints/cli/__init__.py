"""SHELTER command-line interface."""
