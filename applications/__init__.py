"""
Applications module - owner-scoped projects.

This module handles:
- Application entity and lifecycle (create, rename, pause, delete)
- Ownership guard applied before every license or user operation
- Audit log storage
"""
