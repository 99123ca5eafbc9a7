"""
SerenSpace API.

Mental-wellness journaling backend: mood check-ins with streak tracking,
generated mood insights, a community feed and a coping tool catalogue.
"""

__version__ = "1.0.0"
