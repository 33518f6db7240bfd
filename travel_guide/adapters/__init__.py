"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- The place catalog (JSON file)
- Rule-based text matching (retrieval, intent)
- Answer synthesis (templates, external chat model)
"""
