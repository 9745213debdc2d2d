"""
License key generation.

A mask is a template in which ``*`` marks a random position and every
other character is copied literally, e.g. ``KEY-****-****``.
"""

import secrets
import string

PLACEHOLDER = "*"


def build_alphabet(lowercase: bool = True, uppercase: bool = True) -> str:
    """
    Build the alphabet random positions are drawn from.

    Digits are always included, so the alphabet is never empty.

    Args:
        lowercase: Include ``a-z``
        uppercase: Include ``A-Z``

    Returns:
        Alphabet string
    """
    alphabet = string.digits
    if lowercase:
        alphabet += string.ascii_lowercase
    if uppercase:
        alphabet += string.ascii_uppercase
    return alphabet


def generate_license_key(mask: str, lowercase: bool = True, uppercase: bool = True) -> str:
    """
    Generate a license key from a mask.

    Args:
        mask: Template where ``*`` is replaced by a random character
        lowercase: Allow lowercase letters in random positions
        uppercase: Allow uppercase letters in random positions

    Returns:
        Generated key, exactly as long as the mask
    """
    alphabet = build_alphabet(lowercase=lowercase, uppercase=uppercase)
    return "".join(
        secrets.choice(alphabet) if char == PLACEHOLDER else char for char in mask
    )
