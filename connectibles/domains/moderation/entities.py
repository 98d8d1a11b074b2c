from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EscalationLevel(str, Enum):
    GENTLE_WARNING = "gentle_warning"
    STRONG_WARNING = "strong_warning"
    FINAL_WARNING = "final_warning"
    BAN = "ban"


@dataclass(frozen=True)
class Escalation:
    level: EscalationLevel
    message: str

    @property
    def bans(self) -> bool:
        return self.level == EscalationLevel.BAN


# Warnings fire on these exact counts only; a count that jumps past one skips it.
WARNING_THRESHOLDS = {
    1: Escalation(
        EscalationLevel.GENTLE_WARNING,
        "Someone reported your recent activity. Please keep interactions kind and respectful.",
    ),
    5: Escalation(
        EscalationLevel.STRONG_WARNING,
        "You have received several reports. Continued reports may lead to a suspension.",
    ),
    8: Escalation(
        EscalationLevel.FINAL_WARNING,
        "Final warning: a few more reports will suspend your account.",
    ),
}

BAN_ESCALATION = Escalation(
    EscalationLevel.BAN,
    "Your account has been suspended after repeated reports from other students.",
)


def escalation_for(report_count: int, ban_threshold: int = 10) -> Optional[Escalation]:
    """What a user's report total triggers, if anything."""
    if report_count >= ban_threshold:
        return BAN_ESCALATION
    return WARNING_THRESHOLDS.get(report_count)
