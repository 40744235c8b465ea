"""Test helpers for torchgh."""
