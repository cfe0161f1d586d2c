"""
Built-in question bank for VoiceHire

Canned questions per interview type, used whenever the generation API
cannot supply questions. The bank is read-only at runtime.
"""

from types import MappingProxyType

from voicehire.models.question import DifficultyLevel, QuestionCategory


QUESTION_BANK = MappingProxyType({
    QuestionCategory.BEHAVIORAL: (
        "Tell me about yourself and what makes you a good fit for this role.",
        "Describe a time when you had to deal with a difficult coworker or team member. How did you handle it?",
        "Give me an example of a time you showed leadership, even if you weren't in a management role.",
        "Tell me about a project you're particularly proud of. What was your contribution?",
        "Describe a situation where you had to meet a tight deadline. How did you manage your time?",
        "Tell me about a time you received constructive criticism. How did you respond?",
        "Give an example of when you had to adapt to a significant change at work.",
        "Describe a time when you had to persuade someone to see things your way.",
        "Tell me about a mistake you made at work and how you handled it.",
        "How do you handle stress and pressure in the workplace?",
        "Describe a situation where you went above and beyond your job responsibilities.",
        "Tell me about a time you had to work with a team to achieve a common goal.",
        "Give an example of how you've handled a conflict at work.",
        "Describe a time when you had to make a difficult decision with limited information.",
        "Tell me about a time you failed. What did you learn from the experience?",
    ),
    QuestionCategory.TECHNICAL: (
        "Explain the concept of RESTful APIs and why they are important in modern software development.",
        "What is the difference between SQL and NoSQL databases? When would you use each?",
        "Describe how you would design a scalable web application architecture.",
        "Explain the concept of Object-Oriented Programming and its main principles.",
        "What are design patterns? Can you describe a few that you've used?",
        "How would you optimize the performance of a slow database query?",
        "Explain the concept of microservices architecture and its pros and cons.",
        "What is version control and why is it important? Describe your Git workflow.",
        "How do you approach debugging a complex issue in production?",
        "Explain the difference between authentication and authorization.",
        "What is CI/CD and why is it important in software development?",
        "Describe how caching works and when you would implement it.",
        "What are the SOLID principles in software design?",
        "Explain how you would handle security vulnerabilities in a web application.",
        "What is the difference between synchronous and asynchronous programming?",
    ),
    QuestionCategory.SITUATIONAL: (
        "If you were assigned to a project with unclear requirements, how would you proceed?",
        "How would you handle a situation where your manager disagrees with your approach?",
        "If you discovered a critical bug right before a product launch, what would you do?",
        "How would you prioritize competing tasks when everything seems urgent?",
        "If a client requested a feature that would take significant time to build, how would you handle it?",
        "How would you onboard yourself in a new team with minimal documentation?",
        "If you noticed a colleague was struggling with their workload, what would you do?",
        "How would you handle a situation where the technology stack you're comfortable with isn't the best choice for a project?",
        "If stakeholders changed requirements mid-sprint, how would you respond?",
        "How would you approach giving negative feedback to a team member?",
        "If you were given a project with an impossible deadline, what would you do?",
        "How would you handle a situation where two team members have a conflict?",
        "If you discovered that a decision you advocated for was wrong, what would you do?",
        "How would you handle a situation where you need to learn a new technology quickly?",
        "If you were asked to cut corners on quality to meet a deadline, how would you respond?",
    ),
    QuestionCategory.MIXED: (
        "Tell me about yourself and your experience in this field.",
        "What's a technical challenge you recently solved? Walk me through your approach.",
        "How do you stay current with industry trends and new technologies?",
        "Describe your ideal work environment and team culture.",
        "If you had to explain a complex technical concept to a non-technical stakeholder, how would you do it?",
        "Tell me about a time you had to balance quality with speed.",
        "What's your approach to code reviews and giving/receiving feedback?",
        "How would you handle a production outage at 2 AM?",
        "Describe a project where you had to collaborate across different teams.",
        "What do you consider your greatest professional strength and weakness?",
        "How do you approach problem-solving when you encounter something completely new?",
        "Tell me about a time you mentored someone or helped a colleague grow.",
        "What's the most impactful project you've worked on and why?",
        "How do you handle disagreements about technical decisions?",
        "Where do you see yourself professionally in the next 3-5 years?",
    ),
})


DIFFICULTY_PREFIX = MappingProxyType({
    DifficultyLevel.EASY: "For a junior-level candidate: ",
    DifficultyLevel.MEDIUM: "",
    DifficultyLevel.HARD: "This is a senior-level question requiring depth: ",
    DifficultyLevel.EXPERT: "This is an expert-level question demanding comprehensive insight: ",
})


def get_pool(interview_type: "str | QuestionCategory") -> tuple[str, ...]:
    """Questions for an interview type; unknown types get the mixed pool."""
    return QUESTION_BANK[QuestionCategory.resolve(interview_type)]


def difficulty_prefix(difficulty: "str | DifficultyLevel | None") -> str:
    level = DifficultyLevel.parse(difficulty)
    return DIFFICULTY_PREFIX[level] if level else ""
