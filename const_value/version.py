"""
Version information for const_value.
"""

__version__ = "0.1.0"
