"""
snakechase - a snake that hunts food which runs away, on an arena that shrinks.
"""

__version__ = "0.1.0"
