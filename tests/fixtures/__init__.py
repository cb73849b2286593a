"""
Test fixtures package for Arbor tests.
"""
