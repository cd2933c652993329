"""Feedwatch test suite."""
