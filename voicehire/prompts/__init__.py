"""
AI prompt templates for VoiceHire

Contains structured prompts for:
- Question generation
- Answer evaluation
- Report generation
"""

from voicehire.prompts.interviewer import InterviewerPrompts
from voicehire.prompts.evaluator import EvaluatorPrompts
from voicehire.prompts.report import ReportPrompts

__all__ = [
    "InterviewerPrompts",
    "EvaluatorPrompts",
    "ReportPrompts",
]
