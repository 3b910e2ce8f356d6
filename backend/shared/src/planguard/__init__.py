"""Pricing, Stripe checkout and webhook services for Plan Guard Pro."""

__version__ = "0.1.0"
