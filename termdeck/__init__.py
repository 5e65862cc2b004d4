"""
termdeck - container layout core for terminal dashboards
"""

__version__ = "0.1.0"
