"""Encoding and validation utilities for keytree."""
