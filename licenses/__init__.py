"""
Licenses module - License issuance and time accounting.

This module handles:
- License entity and domain logic
- License key generation from masks
- License batch creation, add-time, ban and delete
"""
