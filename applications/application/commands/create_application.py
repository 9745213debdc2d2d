"""
CreateApplicationCommand.

Command to create an application for the authenticated owner.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateApplicationCommand:
    """Command to create an application."""

    owner_id: Optional[int]
    name: str
