"""Test data factories and fake ports for deterministic tests."""
