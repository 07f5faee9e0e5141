"""Shopfront command-line interface."""
