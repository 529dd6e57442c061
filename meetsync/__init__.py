"""
meetsync - rank candidate meeting times from group availability polls.
"""

__version__ = "0.1.0"
