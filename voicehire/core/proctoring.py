"""
Proctoring for VoiceHire

Counts suspicious signals during an interview (tab switches, window
blur, large frame-to-frame motion) and decides between warning the
candidate and terminating the session.

    INACTIVE → ACTIVE → TERMINATED
       ↑_________|___________|   (deactivate)

Each interview owns its own ProctorSession; nothing is shared between
sessions.
"""

import base64
import binascii
import logging
import time
from collections.abc import Callable

import numpy as np

from voicehire.models.proctoring import (
    ProctorEvent,
    ProctorEventType,
    ProctorPhase,
    ProctorState,
    ViolationKind,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ProctorPolicy:
    """
    Violation counter with a debounce window.

    A violation is only counted while the policy is ACTIVE and outside
    the cooldown window that follows the previous counted violation.
    The cooldown is a single deadline on the injected clock, so there
    is nothing to cancel when the session ends.
    """

    def __init__(
        self,
        max_warnings: int = 3,
        cooldown_seconds: float = 8.0,
        dismiss_seconds: float = 8.0,
        clock: Clock = time.monotonic,
    ):
        self.max_warnings = max_warnings
        self.cooldown_seconds = cooldown_seconds
        self.dismiss_seconds = dismiss_seconds
        self.clock = clock

        self.phase = ProctorPhase.INACTIVE
        self.warning_count = 0
        self._cooldown_until = 0.0
        self._pending_warning: ProctorEvent | None = None
        self._warning_expires_at = 0.0

    @property
    def active(self) -> bool:
        return self.phase == ProctorPhase.ACTIVE

    @property
    def cooldown_active(self) -> bool:
        return self.active and self.clock() < self._cooldown_until

    def activate(self) -> None:
        """Start (or restart) proctoring for a session with a clean slate."""
        self.phase = ProctorPhase.ACTIVE
        self.warning_count = 0
        self._cooldown_until = 0.0
        self._clear_warning()

    def deactivate(self) -> None:
        """Stop proctoring. Safe to call in any state, any number of times."""
        self.phase = ProctorPhase.INACTIVE
        self._cooldown_until = 0.0
        self._clear_warning()

    def record_violation(self, reason: str) -> ProctorEvent | None:
        """
        Count a violation.

        Returns:
            A WARNING event while below the limit, a TERMINATED event on
            the violation that reaches it, or None when the violation was
            ignored (inactive, terminated or cooling down).
        """
        if not self.active or self.cooldown_active:
            return None

        now = self.clock()
        self.warning_count += 1
        self._cooldown_until = now + self.cooldown_seconds

        logger.warning(f"Proctoring violation #{self.warning_count}: {reason}")

        if self.warning_count >= self.max_warnings:
            self.phase = ProctorPhase.TERMINATED
            self._clear_warning()
            return ProctorEvent(
                type=ProctorEventType.TERMINATED,
                reason=reason,
                warning_count=self.warning_count,
                max_warnings=self.max_warnings,
            )

        event = ProctorEvent(
            type=ProctorEventType.WARNING,
            reason=reason,
            warning_count=self.warning_count,
            max_warnings=self.max_warnings,
            auto_dismiss_seconds=self.dismiss_seconds,
        )
        self._pending_warning = event
        self._warning_expires_at = now + self.dismiss_seconds
        return event

    def dismiss_warning(self) -> None:
        """Acknowledge the warning currently shown to the candidate."""
        self._clear_warning()

    @property
    def pending_warning(self) -> ProctorEvent | None:
        """The unacknowledged warning, until it auto-dismisses."""
        if self._pending_warning and self.active and self.clock() < self._warning_expires_at:
            return self._pending_warning
        return None

    def snapshot(self) -> ProctorState:
        return ProctorState(
            phase=self.phase,
            warning_count=self.warning_count,
            max_warnings=self.max_warnings,
            cooldown_active=self.cooldown_active,
            pending_warning=self.pending_warning,
        )

    def _clear_warning(self) -> None:
        self._pending_warning = None
        self._warning_expires_at = 0.0


# =============================================================================
# MOTION DETECTION
# =============================================================================

def frame_change_ratio(previous: np.ndarray, current: np.ndarray, pixel_threshold: int = 60) -> float:
    """
    Fraction of pixels that changed noticeably between two frames.

    A pixel counts as changed when the mean absolute difference of its
    R, G and B channels exceeds ``pixel_threshold``. Any alpha channel
    is ignored.
    """
    if previous.shape != current.shape:
        raise ValueError(f"Frame shapes differ: {previous.shape} vs {current.shape}")

    diff = np.abs(current[..., :3].astype(np.int16) - previous[..., :3].astype(np.int16))
    changed = diff.mean(axis=-1) > pixel_threshold
    return float(changed.mean())


def decode_rgba_frame(data: str, width: int, height: int) -> np.ndarray:
    """
    Decode a base64 RGBA buffer (canvas ``ImageData.data``) into an
    ``(height, width, 4)`` uint8 array.

    Raises:
        ValueError: data is not base64 or does not match the dimensions
    """
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Frame data is not valid base64") from e

    expected = width * height * 4
    if len(raw) != expected:
        raise ValueError(f"Frame data has {len(raw)} bytes, expected {expected} for {width}x{height} RGBA")

    return np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 4)


class MotionDetector:
    """
    Compares each sampled frame with the previous one.

    The first frame (and the first after a size change or reset) only
    primes the detector.
    """

    def __init__(self, pixel_threshold: int = 60, change_ratio: float = 0.40):
        self.pixel_threshold = pixel_threshold
        self.change_ratio = change_ratio
        self._previous: np.ndarray | None = None

    def reset(self) -> None:
        self._previous = None

    def check(self, frame: np.ndarray) -> bool:
        """Return True when the frame differs enough to count as motion."""
        previous, self._previous = self._previous, frame.copy()

        if previous is None or previous.shape != frame.shape:
            return False

        ratio = frame_change_ratio(previous, frame, self.pixel_threshold)
        if ratio > self.change_ratio:
            logger.info(f"Significant movement detected: {ratio * 100:.1f}% pixels changed")
            return True
        return False


# =============================================================================
# SESSION
# =============================================================================

class ProctorSession:
    """
    Proctoring context for one interview.

    Frames may arrive at any rate; only one frame per sample interval is
    compared, and frames are ignored entirely while the policy is not
    active.
    """

    def __init__(
        self,
        policy: ProctorPolicy,
        detector: MotionDetector,
        sample_interval_seconds: float = 2.0,
    ):
        self.policy = policy
        self.detector = detector
        self.sample_interval_seconds = sample_interval_seconds
        self._next_sample_at = 0.0

    def activate(self) -> ProctorState:
        self.policy.activate()
        self._reset_sampling()
        logger.info("Proctoring started")
        return self.policy.snapshot()

    def deactivate(self) -> ProctorState:
        was_running = self.policy.phase != ProctorPhase.INACTIVE
        self.policy.deactivate()
        self._reset_sampling()
        if was_running:
            logger.info("Proctoring stopped")
        return self.policy.snapshot()

    def report(self, kind: ViolationKind, reason: str | None = None) -> ProctorEvent | None:
        """Record a browser-reported violation (tab switch, blur, ...)."""
        return self._record(reason or kind.message)

    def submit_frame(self, frame: np.ndarray) -> tuple[bool, ProctorEvent | None]:
        """
        Offer a camera frame to the motion detector.

        Returns:
            (sampled, event): whether the frame was compared, and the
            resulting policy event if motion was detected and counted
        """
        if not self.policy.active:
            return False, None

        now = self.policy.clock()
        if now < self._next_sample_at:
            return False, None
        self._next_sample_at = now + self.sample_interval_seconds

        if self.detector.check(frame):
            return True, self._record(ViolationKind.MOTION.message)
        return True, None

    def _record(self, reason: str) -> ProctorEvent | None:
        event = self.policy.record_violation(reason)
        if event and event.type == ProctorEventType.TERMINATED:
            logger.warning(f"Interview terminated by proctoring: {reason}")
            self.detector.reset()
        return event

    def _reset_sampling(self) -> None:
        self.detector.reset()
        self._next_sample_at = 0.0

    def snapshot(self) -> ProctorState:
        return self.policy.snapshot()


class ProctorRegistry:
    """Holds one ProctorSession per interview id."""

    def __init__(self, factory: Callable[[], ProctorSession]):
        self._factory = factory
        self._sessions: dict[int, ProctorSession] = {}

    def get(self, interview_id: int) -> ProctorSession:
        if interview_id not in self._sessions:
            self._sessions[interview_id] = self._factory()
        return self._sessions[interview_id]

    def peek(self, interview_id: int) -> ProctorSession | None:
        """Existing session for an interview, without creating one."""
        return self._sessions.get(interview_id)

    def discard(self, interview_id: int) -> None:
        session = self._sessions.pop(interview_id, None)
        if session:
            session.deactivate()
