"""
JSON 저장소 테스트
"""

import json

import pytest
from pydantic import ValidationError

from ranking.repository import JsonTournamentRankingRepository


def tournament_payload(tournament_id=1):
    return {
        "tournament": {"id": tournament_id, "name": f"Torneo {tournament_id}", "number": tournament_id, "completedDates": 2},
        "players": [
            {
                "playerId": "P1",
                "playerName": "Player 1",
                "records": [
                    {"dateNumber": 1, "position": 1, "points": 3},
                    {"dateNumber": 2, "position": 2, "points": 2},
                ],
                "registeredDates": [1, 2],
            },
            {
                "playerId": "P2",
                "playerName": "Player 2",
                "records": [{"dateNumber": 1, "position": 2, "points": 2}],
                "registeredDates": [1, 2],
            },
        ],
    }


class TestJsonRepository:
    """JSON 내보내기 파일 로드"""

    @pytest.mark.asyncio
    async def test_single_tournament(self, tmp_path):
        data_file = tmp_path / "ranking.json"
        data_file.write_text(json.dumps(tournament_payload()), encoding="utf-8")

        repository = JsonTournamentRankingRepository(data_file)
        data = await repository.get_tournament_ranking_data(1)

        assert data.tournament.name == "Torneo 1"
        assert len(data.player_inputs) == 2
        assert data.player_inputs[1].registered_dates == frozenset({1, 2})

    @pytest.mark.asyncio
    async def test_multiple_tournaments(self, tmp_path):
        data_file = tmp_path / "ranking.json"
        payload = {"tournaments": [tournament_payload(1), tournament_payload(2)]}
        data_file.write_text(json.dumps(payload), encoding="utf-8")

        repository = JsonTournamentRankingRepository(str(data_file))

        assert (await repository.get_tournament_ranking_data(2)).tournament.id == 2
        assert await repository.get_tournament_ranking_data(3) is None

    @pytest.mark.asyncio
    async def test_list_payload(self, tmp_path):
        data_file = tmp_path / "ranking.json"
        data_file.write_text(json.dumps([tournament_payload(4)]), encoding="utf-8")

        repository = JsonTournamentRankingRepository(data_file)
        assert await repository.get_tournament_ranking_data(4) is not None

    @pytest.mark.asyncio
    async def test_up_to_date(self, tmp_path):
        data_file = tmp_path / "ranking.json"
        data_file.write_text(json.dumps(tournament_payload()), encoding="utf-8")

        repository = JsonTournamentRankingRepository(data_file)
        data = await repository.get_tournament_ranking_data_up_to_date(1, 1)

        p1 = data.player_inputs[0]
        assert data.tournament.completed_dates == 1
        assert [r.date_number for r in p1.records] == [1]
        assert p1.registered_dates == frozenset({1})

    def test_invalid_payload(self, tmp_path):
        data_file = tmp_path / "ranking.json"
        data_file.write_text(json.dumps({"tournament": {"id": 1}}), encoding="utf-8")

        with pytest.raises(ValidationError):
            JsonTournamentRankingRepository(data_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            JsonTournamentRankingRepository(tmp_path / "missing.json")
