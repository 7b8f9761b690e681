"""Default resource gallery reconciliation.

This module decides which gallery each channel should default to and
drives one reconciliation pass over the whole site.
"""
