"""
Storefront Shipping

Shipping zone resolution and rate calculation for the storefront checkout.
"""
__version__ = "1.0.0"
