"""Shared utilities and types for Shopfront."""
