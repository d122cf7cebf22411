"""
WoW Combat Log Reader

Streams World of Warcraft combat log files and splits every line into a
timestamp, an event name and its parameters for downstream analysis.
"""

__version__ = "0.1.0"
