"""Utilities package for pricing-tracker application."""
