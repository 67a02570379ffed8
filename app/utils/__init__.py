"""Utility functions and helpers.

This module contains utility functions for:
- Coercing model output into fixed response shapes
- Mapping upstream failures to the gateway error taxonomy
"""
