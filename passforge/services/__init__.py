"""
Services used across passforge.

Currently the process-wide logger.
"""
