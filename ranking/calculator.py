"""
토너먼트 랭킹 계산 모듈

ELIMINA 2 방식
- fecha별 포인트는 탈락 기록 시점에 확정된 값을 그대로 합산
- 결석(Falta)은 0점
- 완료 fecha가 기준 이상이면 최저 2개 fecha 점수를 제외 (elimina1, elimina2)
- 동점: 1위 → 2위 → 3위 횟수 (많을수록), 결석 수 (적을수록), 입력 순서
- 트렌드: 직전 fecha까지의 랭킹과 순위 비교
"""
from datetime import datetime, timezone
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from loguru import logger

from .aggregator import EliminationAggregator, validate_game_dates
from .config import RankingSettings, ranking_settings
from .exceptions import InvalidArgumentError
from .models import (
    Elimina2Score,
    GameDateSummary,
    PlayerRanking,
    PlayerRankingInput,
    TournamentInfo,
    TournamentRanking,
    TournamentRankingData,
)


# ELIMINA 2: 최저 점수 fecha 2개 제외
ELIMINATED_DATES = 2


class RankingCalculator:
    """토너먼트 랭킹 계산기 (I/O 없음, 상태 없음)"""

    def __init__(self, settings: Optional[RankingSettings] = None):
        self.settings = settings or ranking_settings

    def calculate(
        self,
        tournament: TournamentInfo,
        player_inputs: Iterable[PlayerRankingInput],
        previous_ranking: Optional[TournamentRanking] = None,
        game_dates: Iterable[GameDateSummary] = (),
    ) -> TournamentRanking:
        """
        전체 랭킹 계산

        Args:
            tournament: 토너먼트 정보
            player_inputs: 등록 선수별 원본 데이터
            previous_ranking: 트렌드 비교용 이전 랭킹 (없으면 모두 same)
            game_dates: fecha 요약 (게스트 포함 순위 검증용)

        Returns:
            순위 순서로 정렬된 TournamentRanking
        """
        player_inputs = list(player_inputs)
        validate_game_dates(player_inputs, game_dates, tournament_id=tournament.id)

        aggregator = EliminationAggregator(tournament_id=tournament.id)
        elimina2_applied = self.is_elimina2_active(tournament.completed_dates)

        unsorted = []
        for player_input in player_inputs:
            aggregate = aggregator.aggregate(player_input)
            score = self.calculate_score(aggregate.points_by_date, elimina2_applied)
            unsorted.append(PlayerRanking(
                player=player_input.player,
                points_by_date=aggregate.points_by_date,
                dates_played=aggregate.dates_played,
                score=score,
                tiebreaker=aggregate.tiebreaker,
            ))

        # sorted()는 안정 정렬이므로 모든 기준이 같으면 입력 순서 유지
        ordered = sorted(unsorted, key=lambda r: r.sort_key())
        rankings = tuple(
            replace(r, position=position)
            for position, r in enumerate(ordered, 1)
        )

        ranking = TournamentRanking(
            tournament=tournament,
            rankings=rankings,
            last_updated=datetime.now(timezone.utc),
            elimina2_applied=elimina2_applied,
        )
        ranking = ranking.with_trends(previous_ranking)

        logger.debug(
            f"랭킹 계산 완료: 토너먼트 {tournament.id}, {len(rankings)}명, "
            f"완료 fecha {tournament.completed_dates}, ELIMINA 2 {'적용' if elimina2_applied else '미적용'}"
        )
        return ranking

    def calculate_for_dates(
        self,
        tournament: TournamentInfo,
        player_inputs: Iterable[PlayerRankingInput],
        max_date_number: int,
        game_dates: Iterable[GameDateSummary] = (),
    ) -> TournamentRanking:
        """1..max_date_number fecha만으로 랭킹 계산 (트렌드 미적용)"""
        if isinstance(max_date_number, bool) or not isinstance(max_date_number, int) or max_date_number < 0:
            raise InvalidArgumentError(f"max_date_number는 0 이상의 정수여야 합니다: {max_date_number!r}")

        data = TournamentRankingData(
            tournament=tournament,
            player_inputs=tuple(player_inputs),
            game_dates=tuple(game_dates),
        ).up_to_date(max_date_number)
        return self.calculate_from_data(data)

    def calculate_from_data(
        self,
        data: TournamentRankingData,
        previous_ranking: Optional[TournamentRanking] = None,
    ) -> TournamentRanking:
        """저장소 데이터로 랭킹 계산"""
        return self.calculate(
            data.tournament,
            data.player_inputs,
            previous_ranking=previous_ranking,
            game_dates=data.game_dates,
        )

    def apply_trends(
        self,
        current: TournamentRanking,
        previous: Optional[TournamentRanking],
    ) -> TournamentRanking:
        return current.with_trends(previous)

    def is_elimina2_active(self, completed_dates: int) -> bool:
        return completed_dates >= self.settings.elimina2_min_completed_dates

    def calculate_score(self, points_by_date: Dict[int, int], elimina2_applied: bool) -> Elimina2Score:
        """
        ELIMINA 2 점수 계산

        최저 점수 2개를 고른다 (같은 점수면 앞 fecha 우선).
        fecha가 2개 미만이면 부족한 만큼 0점으로 채운다.
        """
        total_points = sum(points_by_date.values())
        if not elimina2_applied:
            return Elimina2Score.not_applied(total_points)

        worst: List[int] = [
            points for _, points in sorted(points_by_date.items(), key=lambda item: (item[1], item[0]))
        ][:ELIMINATED_DATES]
        worst = [0] * (ELIMINATED_DATES - len(worst)) + worst

        return Elimina2Score.applied(total_points, worst[0], worst[1])

