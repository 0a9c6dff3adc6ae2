"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the cache layer to external systems:
- Cache provider (cachetools)
- Status persistence (in-memory, JSON file)
"""
