#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconv/utils/__init__.py
"""Shared helpers for escaping and I/O."""
