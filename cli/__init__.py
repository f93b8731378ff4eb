"""Goldenpane command-line interface."""
