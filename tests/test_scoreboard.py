"""Tests for scoring, ranking and response statistics."""

import pytest

from quiz_live.core.models import Player, SubmittedAnswer
from quiz_live.core.services.scoreboard import (
    compute_response_stats,
    get_rank,
    get_top_scorers,
    rank_players,
    score_answer,
)


def answered(player_id, choice):
    return SubmittedAnswer(player_id=player_id, choice_index=choice, elapsed_seconds=1.0, is_correct=False, points=0)


def test_wrong_answers_score_nothing():
    assert score_answer(False, 0.0, 20) == 0


def test_instant_correct_answer_scores_maximum():
    assert score_answer(True, 0.0, 20) == 1000


def test_score_decreases_with_time_and_stays_positive():
    scores = [score_answer(True, elapsed, 10) for elapsed in (0, 1, 2.5, 5, 9.9, 10)]
    assert scores == sorted(scores, reverse=True)
    assert len(set(scores)) == len(scores)
    assert scores[-1] == 500


def test_elapsed_is_clamped():
    assert score_answer(True, -3, 10) == 1000
    assert score_answer(True, 60, 10) == 500


def test_ranking_is_stable_for_ties():
    players = [
        Player(id="a", username="Ann", points=100),
        Player(id="b", username="Ben", points=300),
        Player(id="c", username="Cid", points=100),
        Player(id="d", username="Dee", points=300),
        Player(id="e", username="Eve", points=100),
    ]
    assert [row.username for row in rank_players(players)] == ["Ben", "Dee", "Ann", "Cid", "Eve"]


def test_ranking_does_not_reorder_the_player_list():
    players = [Player(id="a", username="Ann", points=0), Player(id="b", username="Ben", points=10)]
    rank_players(players)
    assert [p.id for p in players] == ["a", "b"]


def test_top_scorers_limit():
    players = [Player(id=str(i), username=f"P{i}", points=i) for i in range(8)]
    top = get_top_scorers(players, 5)
    assert [row.points for row in top] == [7, 6, 5, 4, 3]


def test_rank_and_player_ahead():
    players = [
        Player(id="a", username="Ann", points=10),
        Player(id="b", username="Ben", points=30),
        Player(id="c", username="Cid", points=20),
    ]
    assert get_rank(players, "b") == (1, None)
    assert get_rank(players, "c") == (2, "Ben")
    assert get_rank(players, "a") == (3, "Cid")
    with pytest.raises(KeyError):
        get_rank(players, "zzz")


def test_response_percentages_are_empty_without_answers():
    stats = compute_response_stats([], 4)
    assert stats.counts == [0, 0, 0, 0]
    assert stats.percentages == []
    assert stats.total == 0


@pytest.mark.parametrize(
    "choices",
    [
        [0],
        [0, 1, 2],
        [1, 1, 3],
        [0, 0, 1, 1, 2, 2, 3],
        [3, 3, 3, 3, 3, 2],
    ],
)
def test_response_percentages_sum_to_about_100(choices):
    answers = [answered(str(i), choice) for i, choice in enumerate(choices)]

    stats = compute_response_stats(answers, 4)

    assert stats.total == len(choices)
    assert sum(stats.counts) == len(choices)
    assert abs(sum(stats.percentages) - 100) <= 2


def test_response_counts_per_choice():
    answers = [answered(str(i), choice) for i, choice in enumerate([1, 1, 3])]

    stats = compute_response_stats(answers, 4)

    assert stats.counts == [0, 2, 0, 1]
    assert stats.percentages == [0, 67, 0, 33]


def test_response_percentages_round_half_up():
    answers = [answered("0", 0)] + [answered(str(i), 1) for i in range(1, 8)]

    stats = compute_response_stats(answers, 2)

    assert stats.percentages == [13, 88]


def test_out_of_range_choices_are_not_counted():
    stats = compute_response_stats([answered("a", 5), answered("b", 0)], 2)
    assert stats.counts == [1, 0]
    assert stats.total == 1
