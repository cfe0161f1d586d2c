"""
AI Evaluator Prompt Templates

Contains the prompt for scoring a single candidate answer.
"""

from voicehire.models.report import InterviewMeta


class EvaluatorPrompts:
    """
    Prompt templates for AI evaluation of answers.

    Key principles:
    - One concrete strength
    - One actionable improvement
    - A short verdict that can be spoken aloud
    """

    OUTPUT_FORMAT = """Return ONLY a valid JSON object. No markdown. No explanation:
{
  "score": <integer 0 to 100>,
  "positive": "<one specific strength of this answer in 1-2 sentences>",
  "improve": "<one specific actionable improvement in 1-2 sentences>",
  "brief": "<one sentence overall verdict, spoken aloud to the candidate>"
}"""

    def generate_evaluation_prompt(
        self,
        question_text: str,
        answer_text: str,
        meta: InterviewMeta,
    ) -> str:
        """Generate prompt for evaluating one answer."""
        difficulty = meta.difficulty or "Medium"
        return f"""You are evaluating a candidate's answer in a {difficulty} {meta.interview_type} interview for a {meta.job_role} role.

Question: "{question_text}"
Candidate's answer: "{answer_text}"

{self.OUTPUT_FORMAT}"""
