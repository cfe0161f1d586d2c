"""
Configuration for VoiceHire
"""

from voicehire.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
