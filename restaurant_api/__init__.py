"""
                Restaurant API

Food delivery backend: restaurant profiles and menus for owners,
restaurant search for customers, and order status tracking.
"""

__version__ = "1.0.0"
