"""
Interface definitions for passforge's services.
"""

from .logger import ILogger

__all__ = ["ILogger"]
