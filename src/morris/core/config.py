"""Rule options shared by the machine and the controller."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RuleSet:
    """Variant switches for a game.

    Attributes:
        flying_enabled: A side reduced to three pieces may jump anywhere.
        quiet_move_limit: Consecutive moves in the movement phases without a
            capture before the game is drawn. ``None`` disables the rule.
        protect_mills: Pieces in a mill cannot be captured while their owner
            has pieces outside any mill.
    """

    flying_enabled: bool = True
    quiet_move_limit: int | None = 50
    protect_mills: bool = True

    def __post_init__(self) -> None:
        if self.quiet_move_limit is not None and self.quiet_move_limit < 1:
            raise ValueError(
                f"quiet_move_limit must be positive or None: {self.quiet_move_limit!r}"
            )


DEFAULT_RULES = RuleSet()
