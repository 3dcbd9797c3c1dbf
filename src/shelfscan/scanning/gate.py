# ABOUTME: Scan gate: ISBN shape validation plus a repeat-lock over decoder events.
# ABOUTME: Holds the Idle/Locked state machine that the notifier releases after cool-down.

import enum
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class IsbnPolicy(enum.Enum):
    """Which decoded strings count as ISBN candidates. No checksum either way."""

    STRICT = re.compile(r"97[89][0-9]{10}\Z")
    LOOSE = re.compile(r"978")

    def matches(self, raw: str) -> bool:
        # match() anchors the start; STRICT anchors its own end with \Z.
        return self.value.match(raw) is not None

    @classmethod
    def from_name(cls, name: str) -> "IsbnPolicy":
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown ISBN policy: {name!r}") from None


@dataclass(frozen=True)
class Idle:
    """No ISBN is locked; any valid candidate is admitted."""


@dataclass(frozen=True)
class Locked:
    """The last admitted ISBN; repeats of it are rejected until released."""

    isbn: str


GateState = Idle | Locked


class ScanGate:
    """Admits decoded strings that look like ISBNs and are not immediate repeats.

    The decoder fires many times per second while a barcode stays in frame;
    the lock turns that burst into a single candidate. Admission is
    synchronous, so a repeat arriving while the first candidate is still
    being resolved is already rejected.
    """

    def __init__(
        self,
        policy: IsbnPolicy = IsbnPolicy.STRICT,
        acknowledge: Callable[[], None] | None = None,
    ) -> None:
        self._policy = policy
        self._acknowledge = acknowledge
        self._state: GateState = Idle()

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def policy(self) -> IsbnPolicy:
        return self._policy

    def admit(self, raw: str) -> str | None:
        """Return raw as a candidate ISBN, or None if it is rejected.

        Rejections are silent and never touch the lock.
        """
        if not self._policy.matches(raw):
            logger.debug("Rejected non-ISBN scan: %r", raw)
            return None
        if self._state == Locked(raw):
            logger.debug("Rejected repeat scan: %s", raw)
            return None

        self._state = Locked(raw)
        self._beep()
        logger.info("Admitted %s", raw)
        return raw

    def release(self, isbn: str | None = None) -> None:
        """Return to Idle.

        With an isbn, only releases if that isbn still holds the lock, so a
        late timer from an earlier scan cannot unlock a newer one.
        """
        if isbn is not None and self._state != Locked(isbn):
            return
        self._state = Idle()

    def _beep(self) -> None:
        if self._acknowledge is None:
            return
        try:
            self._acknowledge()
        except Exception:
            # The tone is advisory; a broken audio device must not stop the scan.
            logger.warning("Scan acknowledgment failed", exc_info=True)
