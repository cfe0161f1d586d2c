"""
API endpoint modules for VoiceHire
"""

from voicehire.api.endpoints import auth, interview, metadata, proctoring, report

__all__ = ["auth", "interview", "metadata", "proctoring", "report"]
