"""
Report build outcomes to GitHub as commit statuses.
"""

__version__ = "1.0.0"
