"""
Test fixtures package.

This package provides reusable pytest fixtures for testing the thumbnail
pipeline. Import fixtures into conftest.py to make them available to all tests.

Available fixture modules:
- database: SQLite-backed engine, session factory and ImageStore fixtures
"""
