"""
Core business logic modules for VoiceHire

Contains:
- Interview Orchestrator: interview lifecycle and persistence
- AI Reasoning: question generation, evaluation and reports via Gemini
- Question Selector: built-in question bank
- Evaluation Engine: answer scoring and feedback
- Report Generator: final report compilation
- Proctoring: violation policy and motion detection
"""

from voicehire.core.ai_reasoning import AIReasoningLayer, AIUnavailableError
from voicehire.core.evaluation_engine import EvaluationEngine
from voicehire.core.interview_orchestrator import InterviewOrchestrator
from voicehire.core.proctoring import MotionDetector, ProctorPolicy, ProctorRegistry, ProctorSession
from voicehire.core.question_selector import QuestionSelector
from voicehire.core.report_generator import ReportGenerator

__all__ = [
    "AIReasoningLayer",
    "AIUnavailableError",
    "EvaluationEngine",
    "InterviewOrchestrator",
    "MotionDetector",
    "ProctorPolicy",
    "ProctorRegistry",
    "ProctorSession",
    "QuestionSelector",
    "ReportGenerator",
]
