"""
Waymark Search - Core Package

Query compiler and content renderer for waymark comments: turns free-form
queries into structured filters and matched waymarks into aligned,
terminal-width-aware output.
"""

__version__ = "0.1.0"
__author__ = "Waymark Team"
