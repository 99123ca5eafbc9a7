"""
Database module - Motor connection manager.
"""

from common.database.mongodb import MongoDB

__all__ = ["MongoDB"]
