"""
minify-font: subset fonts to a character set and convert between web font formats.
"""

__version__ = "1.0.0"
