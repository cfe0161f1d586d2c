"""
AI Interviewer Prompt Templates

Prompts for generating the question set of an interview.
"""

from voicehire.core.question_bank import difficulty_prefix
from voicehire.models.question import SelectionRequest


class InterviewerPrompts:
    """Prompt templates for question generation."""

    SYSTEM_CONTEXT = """You are Morgan Reid, a senior hiring manager conducting a mock interview.
Make questions sound natural and conversational, as a real interviewer would speak them.
Be specific and progressively challenging."""

    def generate_questions_prompt(self, request: SelectionRequest) -> str:
        """Generate prompt for the full question list of an interview."""
        lines = [
            self.SYSTEM_CONTEXT,
            "",
            f"{difficulty_prefix(request.difficulty)}Generate exactly {request.num_questions} "
            f"{request.interview_type} interview questions for a {request.difficulty}-level "
            f"{request.job_role} candidate.",
        ]
        if request.experience:
            lines.append(f"Candidate experience level: {request.experience}.")
        if request.topic:
            lines.append(f"Focus specifically on: {request.topic}.")

        lines.extend([
            "",
            "Return ONLY a valid JSON array of strings. No explanation. No markdown.",
            'Example: ["Tell me about yourself.", "Describe a recent challenge you overcame."]',
        ])
        return "\n".join(lines)
