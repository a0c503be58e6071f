"""Service for scoring answers and building leaderboards and response statistics."""

from __future__ import annotations

from dataclasses import dataclass

from quiz_live.constants.quiz_constants import MAX_POINTS
from quiz_live.core.models import Player, SubmittedAnswer


@dataclass(slots=True)
class ScoreboardRow:
    """Immutable snapshot returned to consumers."""

    id: str
    username: str
    points: int

    def to_payload(self) -> dict[str, object]:
        return {"id": self.id, "username": self.username, "points": self.points}


@dataclass(slots=True)
class ResponseStats:
    """Per-choice answer counts for one round."""

    counts: list[int]
    percentages: list[int]
    total: int


def score_answer(is_correct: bool, elapsed_seconds: float, time_limit_seconds: int) -> int:
    """Points for one answer.

    A correct answer earns between ``MAX_POINTS`` (instant) and half of it (at
    the deadline), decreasing linearly with the time taken. Wrong answers earn
    nothing.
    """
    if not is_correct:
        return 0
    limit = max(float(time_limit_seconds), 1e-9)
    elapsed = min(max(elapsed_seconds, 0.0), limit)
    return round(MAX_POINTS * (1 - (elapsed / limit) / 2))


def rank_players(players: list[Player]) -> list[ScoreboardRow]:
    """Return every player sorted by points, highest first; ties keep join order."""
    ordered = sorted(players, key=lambda p: -p.points)
    return [ScoreboardRow(id=p.id, username=p.username, points=p.points) for p in ordered]


def get_top_scorers(players: list[Player], limit: int) -> list[ScoreboardRow]:
    return rank_players(players)[:limit]


def get_rank(players: list[Player], player_id: str) -> tuple[int, str | None]:
    """Return the 1-based rank of a player and the username directly above them."""
    rows = rank_players(players)
    for position, row in enumerate(rows):
        if row.id == player_id:
            ahead = rows[position - 1].username if position > 0 else None
            return position + 1, ahead
    raise KeyError(player_id)


def compute_response_stats(answers: list[SubmittedAnswer], answer_count: int) -> ResponseStats:
    """Count the answers given to each choice.

    Percentages are rounded half up to whole numbers (12.5 -> 13) and stay
    empty when nobody answered.
    """
    counts = [0] * answer_count
    for answer in answers:
        if 0 <= answer.choice_index < answer_count:
            counts[answer.choice_index] += 1

    total = sum(counts)
    if total == 0:
        return ResponseStats(counts=counts, percentages=[], total=0)
    percentages = [int(count * 100 / total + 0.5) for count in counts]
    return ResponseStats(counts=counts, percentages=percentages, total=total)
