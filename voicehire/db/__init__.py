"""
Persistence layer for VoiceHire
"""

from voicehire.db.database import create_db_engine, dispose_engine, get_db, init_db

__all__ = ["create_db_engine", "dispose_engine", "get_db", "init_db"]
