"""
VenomAuth Django project.
"""
