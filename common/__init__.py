"""
Common utilities for the operation benchmark: metric conversions and the thread runner.
"""
