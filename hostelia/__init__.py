"""Hostelia notification service package."""
