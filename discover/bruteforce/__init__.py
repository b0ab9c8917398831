# File: discover/bruteforce/__init__.py
"""discover.bruteforce: Пул воркеров для перебора путей по словарю."""

from .brute_force import DEFAULT_GRACE, BruteForcer, ScanStats

__all__ = ["BruteForcer", "ScanStats", "DEFAULT_GRACE"]
