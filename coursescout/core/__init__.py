"""
Core domain layer for coursescout.

This package contains domain logic with no network or database access.
All code here should be testable without a store or provider.
"""

from __future__ import annotations

__all__ = []
