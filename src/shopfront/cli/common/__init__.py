"""Shared CLI plumbing: context, options, error handling and service wiring."""
