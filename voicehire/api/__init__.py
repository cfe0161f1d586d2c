"""
API layer for VoiceHire

Contains FastAPI routers for:
- Authentication
- Interview management
- Report generation
- Proctoring
"""

from voicehire.api.router import api_router

__all__ = ["api_router"]
