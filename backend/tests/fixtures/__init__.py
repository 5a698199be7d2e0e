"""Shared test data for coldcheck tests."""
