"""
VoiceHire - Mock Interview Platform

Candidates start a simulated interview for a role, answer generated
questions by voice or text, and receive scored feedback and a final
performance report. Webcam and tab-focus proctoring run alongside.
"""

__version__ = "1.0.0"
__author__ = "VoiceHire Team"
