"""Operator utilities."""
