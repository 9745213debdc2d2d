"""
Accounts module - dashboard owner sessions.

Sessions are issued elsewhere; this module stores and validates them.
"""
