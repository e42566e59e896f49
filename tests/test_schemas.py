"""
랭킹 스키마 및 값 객체 테스트
"""

import pytest
from pydantic import ValidationError

from ranking.calculator import RankingCalculator
from ranking.models import Elimina2Score, RankingTrend, TiebreakerStats, TrendDirection
from ranking.schemas import (
    PlayerRankingDTO,
    TournamentRankingDataSchema,
    TournamentRankingDTO,
)


class TestRankingTrend:
    """순위 변동 계산"""

    def test_moved_up(self):
        trend = RankingTrend.calculate(5, 2)
        assert trend.direction == TrendDirection.UP
        assert trend.positions_changed == 3

    def test_moved_down(self):
        trend = RankingTrend.calculate(1, 4)
        assert trend.direction == TrendDirection.DOWN
        assert trend.positions_changed == 3

    def test_unchanged(self):
        assert RankingTrend.calculate(3, 3) == RankingTrend.same()

    def test_first_appearance(self):
        assert RankingTrend.calculate(None, 1) == RankingTrend.same()

    def test_direction_values(self):
        assert TrendDirection.UP.value == "up"
        assert TrendDirection.DOWN == "down"


class TestValueObjects:
    """점수/동점 처리 값 객체"""

    def test_elimina2_not_applied(self):
        score = Elimina2Score.not_applied(40)
        assert score.is_applied is False
        assert score.effective_score == 40
        assert score.eliminated_points == 0

    def test_elimina2_applied_with_zero(self):
        """적용되어 0점이 제외된 경우와 미적용은 구분된다"""
        score = Elimina2Score.applied(40, 0, 0)
        assert score.is_applied is True
        assert score.final_score == 40

    def test_tiebreaker_sort_key(self):
        better = TiebreakerStats(first_places=1)
        worse = TiebreakerStats(second_places=5, absences=0)
        assert better.sort_key() < worse.sort_key()

    def test_tiebreaker_position_counts(self):
        stats = TiebreakerStats().with_position(1).with_position(3).with_position(7)
        assert (stats.first_places, stats.second_places, stats.third_places) == (1, 0, 1)


class TestRankingDTO:
    """응답 DTO"""

    def test_camel_case_keys(self, two_date_data):
        ranking = RankingCalculator().calculate_from_data(two_date_data)
        response = PlayerRankingDTO.from_ranking(ranking.rankings[0]).to_response()

        for key in ("position", "playerId", "playerName", "totalPoints", "datesPlayed",
                    "pointsByDate", "trend", "positionsChanged", "firstPlaces",
                    "secondPlaces", "thirdPlaces", "absences"):
            assert key in response
        assert "player_id" not in response

    def test_final_score_absent_before_elimina(self, two_date_data):
        ranking = RankingCalculator().calculate_from_data(two_date_data)
        response = PlayerRankingDTO.from_ranking(ranking.rankings[0]).to_response()

        assert "finalScore" not in response
        assert "elimina1" not in response
        assert "elimina2" not in response

    def test_final_score_present_after_elimina(self, six_date_data):
        ranking = RankingCalculator().calculate_from_data(six_date_data)
        response = PlayerRankingDTO.from_ranking(ranking.get_leader()).to_response()

        assert response["finalScore"] == 12
        assert response["elimina1"] == 1
        assert response["elimina2"] == 1

    def test_tournament_response(self, two_date_data):
        ranking = RankingCalculator().calculate_from_data(two_date_data)
        response = TournamentRankingDTO.from_ranking(ranking).to_response()

        assert response["tournament"]["completedDates"] == 2
        assert response["tournament"]["totalDates"] == 12
        assert len(response["rankings"]) == 3
        assert "lastUpdated" in response


class TestInputSchema:
    """JSON 입력 스키마"""

    def test_to_domain(self):
        raw = {
            "tournament": {"id": 5, "name": "Torneo 5", "number": 5, "completedDates": 1},
            "players": [
                {
                    "playerId": "P1",
                    "playerName": "Juan Perez",
                    "playerAlias": "Juanito",
                    "records": [{"dateNumber": 1, "position": 1, "points": 2}],
                    "registeredDates": [1],
                },
                {
                    "player_id": "P2",
                    "player_name": "Ana Lopez",
                    "records": [{"date_number": 1, "position": 2, "points": 1, "eliminator_player_id": "P1"}],
                    "registered_dates": [1],
                },
            ],
            "gameDates": [{"dateNumber": 1, "participantIds": ["P1", "P2"], "positions": [1, 2]}],
        }
        data = TournamentRankingDataSchema(**raw).to_domain()

        assert data.tournament.total_dates == 12
        assert data.player_inputs[0].player.alias == "Juanito"
        assert data.player_inputs[1].records[0].eliminator_player_id == "P1"
        assert data.game_dates[0].player_count == 2

    def test_missing_player_name(self):
        with pytest.raises(ValidationError):
            TournamentRankingDataSchema(**{
                "tournament": {"id": 1, "name": "T", "number": 1},
                "players": [{"playerId": "P1"}],
            })
