"""
psmio converts search-engine synopsis files into a uniform PSM model.
"""

__version__ = "0.1.0"
