"""
AI Report Generation Prompts
"""

from collections.abc import Sequence

from voicehire.models.report import InterviewMeta


class ReportPrompts:
    """Prompt templates for the end-of-interview analysis."""

    SYSTEM_CONTEXT = "You are a professional interview coach."

    OUTPUT_FORMAT = """Analyze the entire interview holistically and return ONLY a valid JSON object. No markdown, no explanation:
{
  "overall_score": <integer 0-100>,
  "grade": "<Excellent|Good|Average|Needs Improvement|Poor>",
  "communication": <integer 0-100>,
  "relevance": <integer 0-100>,
  "confidence": <integer 0-100>,
  "structure": <integer 0-100>,
  "depth": <integer 0-100>,
  "strengths": ["<specific strength 1>", "<specific strength 2>", "<specific strength 3>"],
  "improvements": ["<actionable improvement 1>", "<actionable improvement 2>", "<actionable improvement 3>"],
  "recommendation": "<2-3 sentence strategic recommendation for this candidate's career development>"
}"""

    def generate_report_prompt(
        self,
        meta: InterviewMeta,
        answered: Sequence[tuple[str, str, int | None]],
    ) -> str:
        """Generate prompt for the complete interview report."""
        qa_text = "\n\n".join(
            f"Q{i}: {question}\nAnswer: {answer}"
            for i, (question, answer, _) in enumerate(answered, 1)
        )
        difficulty = meta.difficulty or "Medium"

        return f"""{self.SYSTEM_CONTEXT} You are evaluating a complete {difficulty} {meta.interview_type} interview for a {meta.job_role} candidate.

Here are all the questions and candidate answers:

{qa_text}

{self.OUTPUT_FORMAT}"""
