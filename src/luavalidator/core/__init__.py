"""Validation results, configuration and the validator entry points."""
