"""
ORM models for VoiceHire

Questions, answers and reports are written once and never updated.
"""

import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    photo = Column(Text)  # base64 or URL
    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    interviews = relationship("Interview", back_populates="user", cascade="all, delete-orphan")


class Interview(Base):
    __tablename__ = "interviews"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_role = Column(String, nullable=False)
    experience = Column(String)
    interview_type = Column(String, nullable=False)  # behavioral / technical / situational / mixed
    topic = Column(String)
    difficulty = Column(String, nullable=False)  # Easy / Medium / Hard / Expert
    num_questions = Column(Integer, nullable=False)
    overall_score = Column(Integer)
    grade = Column(String)
    status = Column(String, default="in_progress")  # in_progress / completed
    started_at = Column(DateTime(timezone=True), default=utc_now)
    completed_at = Column(DateTime(timezone=True))

    user = relationship("User", back_populates="interviews")
    questions = relationship(
        "Question",
        back_populates="interview",
        order_by="Question.question_index",
        cascade="all, delete-orphan",
    )
    answers = relationship("Answer", back_populates="interview", cascade="all, delete-orphan")
    reports = relationship(
        "Report",
        back_populates="interview",
        order_by="Report.id",
        cascade="all, delete-orphan",
    )


class Question(Base):
    __tablename__ = "questions"
    id = Column(Integer, primary_key=True, autoincrement=True)
    interview_id = Column(Integer, ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True)
    question_index = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)

    interview = relationship("Interview", back_populates="questions")
    answer = relationship("Answer", back_populates="question", uselist=False, passive_deletes=True)


class Answer(Base):
    __tablename__ = "answers"
    __table_args__ = (UniqueConstraint("question_id", name="uq_answers_question"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    interview_id = Column(Integer, ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False)
    answer_text = Column(Text, nullable=False)
    score = Column(Integer)
    positive = Column(Text)
    improve = Column(Text)
    brief = Column(Text)
    answered_at = Column(DateTime(timezone=True), default=utc_now)

    interview = relationship("Interview", back_populates="answers")
    question = relationship("Question", back_populates="answer")


class Report(Base):
    __tablename__ = "reports"
    id = Column(Integer, primary_key=True, autoincrement=True)
    interview_id = Column(Integer, ForeignKey("interviews.id", ondelete="CASCADE"), nullable=False, index=True)
    overall_score = Column(Integer, nullable=False)
    grade = Column(String, nullable=False)
    communication = Column(Integer, nullable=False)
    relevance = Column(Integer, nullable=False)
    confidence = Column(Integer, nullable=False)
    structure = Column(Integer, nullable=False)
    depth = Column(Integer, nullable=False)
    strengths = Column(Text, nullable=False)  # JSON array stored as string
    improvements = Column(Text, nullable=False)  # JSON array stored as string
    recommendation = Column(Text, nullable=False)
    generated_at = Column(DateTime(timezone=True), default=utc_now)

    interview = relationship("Interview", back_populates="reports")
