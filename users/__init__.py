"""
Users module - Application end users and their entitlement.

This module handles:
- AppUser and UserVar entities
- Extend and subtract expiry for user cohorts
- Ban, pause, hardware id reset and subscription reset
"""
