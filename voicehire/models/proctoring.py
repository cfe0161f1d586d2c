"""
Proctoring models for VoiceHire
"""

from enum import Enum

from pydantic import BaseModel, Field


class ProctorPhase(str, Enum):
    """Proctoring state machine states."""

    INACTIVE = "inactive"
    ACTIVE = "active"
    TERMINATED = "terminated"


class ViolationKind(str, Enum):
    """Signals that count as leaving focus during a session."""

    TAB_SWITCH = "tab_switch"
    WINDOW_BLUR = "window_blur"
    MOTION = "motion"

    @property
    def message(self) -> str:
        """Message shown to the candidate."""
        messages = {
            "tab_switch": "You switched away from the interview tab. Please stay focused on this page.",
            "window_blur": "You navigated away from the browser window. Please keep this window focused.",
            "motion": "Excessive head movement detected. Please face the camera and stay focused on the interview.",
        }
        return messages[self.value]


class ProctorEventType(str, Enum):
    WARNING = "warning"
    TERMINATED = "terminated"


class ProctorEvent(BaseModel):
    """Emitted by the policy for every violation it accepts."""

    type: ProctorEventType
    reason: str
    warning_count: int
    max_warnings: int
    # Warnings close themselves after this many seconds if not acknowledged
    auto_dismiss_seconds: float | None = None


class ProctorState(BaseModel):
    """Snapshot of one session's proctoring policy."""

    phase: ProctorPhase = ProctorPhase.INACTIVE
    warning_count: int = Field(default=0, ge=0)
    max_warnings: int = 3
    cooldown_active: bool = False
    pending_warning: ProctorEvent | None = None

    @property
    def active(self) -> bool:
        return self.phase == ProctorPhase.ACTIVE

    @property
    def status_text(self) -> str:
        return f"Warnings: {self.warning_count} / {self.max_warnings}"
