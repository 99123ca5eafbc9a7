"""
SerenSpace services.
"""
