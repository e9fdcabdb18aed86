"""
Cardwise - Card Advisory & Purchase Confirmation Service

A FastAPI-based service that ranks payment cards by their interest-free
payment window and holds purchase records until the user confirms them.
"""

__version__ = "0.1.0"
