"""Content platform layer.

This module reads the site channel tree, permissions, and resource
galleries, and persists default gallery assignments.
"""
