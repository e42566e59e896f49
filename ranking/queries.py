"""
랭킹 조회 유스케이스

- GetTournamentRankingUseCase: 토너먼트 전체 랭킹
- GetPlayerRankingUseCase: 선수 한 명의 랭킹

매 호출마다 저장소에서 원본 데이터를 새로 조회하여 계산한다 (캐시 없음).
"""
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .calculator import RankingCalculator
from .config import RankingSettings, ranking_settings
from .exceptions import DataIntegrityError
from .models import TournamentRanking
from .repository import TournamentRankingRepository
from .schemas import PlayerRankingDTO, TournamentRankingDTO


@dataclass(frozen=True)
class GetTournamentRankingQuery:
    tournament_id: int


@dataclass(frozen=True)
class GetPlayerRankingQuery:
    tournament_id: int
    player_id: str


class _RankingQueryHandler:
    """현재 랭킹 + 직전 fecha 기준 트렌드 계산 공통 로직"""

    def __init__(
        self,
        repository: TournamentRankingRepository,
        calculator: Optional[RankingCalculator] = None,
        settings: Optional[RankingSettings] = None,
    ):
        self.repository = repository
        self.settings = settings or ranking_settings
        self.calculator = calculator or RankingCalculator(self.settings)

    async def _compute_ranking(self, tournament_id: int) -> Optional[TournamentRanking]:
        # 1. 현재 데이터 조회
        data = await self.repository.get_tournament_ranking_data(tournament_id)
        if data is None:
            logger.info(f"토너먼트 없음: {tournament_id}")
            return None

        try:
            # 2. 현재 랭킹 (트렌드 없음)
            current = self.calculator.calculate_from_data(data)

            # 3. 직전 fecha까지의 랭킹
            completed_dates = data.tournament.completed_dates
            previous = None
            if completed_dates >= self.settings.trend_min_completed_dates:
                previous_data = await self.repository.get_tournament_ranking_data_up_to_date(
                    tournament_id, completed_dates - 1
                )
                if previous_data is not None:
                    previous = self.calculator.calculate_from_data(previous_data)
                else:
                    logger.warning(f"이전 fecha 데이터 없음: 토너먼트 {tournament_id}, fecha {completed_dates - 1}")
        except DataIntegrityError as e:
            logger.error(f"랭킹 계산 중단 (데이터 무결성 오류): {e}")
            raise

        # 4. 트렌드 적용
        ranking = self.calculator.apply_trends(current, previous)
        logger.info(
            f"토너먼트 {tournament_id} 랭킹 계산: {ranking.player_count}명, 완료 fecha {completed_dates}"
        )
        return ranking


class GetTournamentRankingUseCase(_RankingQueryHandler):
    """토너먼트 전체 랭킹 조회"""

    async def execute(self, query: GetTournamentRankingQuery) -> Optional[TournamentRankingDTO]:
        ranking = await self._compute_ranking(query.tournament_id)
        if ranking is None:
            return None
        return TournamentRankingDTO.from_ranking(ranking)


class GetPlayerRankingUseCase(_RankingQueryHandler):
    """선수 랭킹 조회"""

    async def execute(self, query: GetPlayerRankingQuery) -> Optional[PlayerRankingDTO]:
        ranking = await self._compute_ranking(query.tournament_id)
        if ranking is None:
            return None

        player_ranking = ranking.get_player_ranking(query.player_id)
        if player_ranking is None:
            logger.info(f"선수 없음: 토너먼트 {query.tournament_id}, 선수 {query.player_id}")
            return None
        return PlayerRankingDTO.from_ranking(player_ranking)
