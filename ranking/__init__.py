"""
토너먼트 랭킹 엔진

fecha별 탈락 기록을 합산하여 ELIMINA 2 방식으로 토너먼트 랭킹을 계산한다.
"""
from .calculator import RankingCalculator
from .config import RankingSettings, ranking_settings
from .exceptions import DataIntegrityError, InvalidArgumentError, RankingError
from .models import (
    Elimina2Score,
    EliminationRecord,
    GameDateSummary,
    PlayerInfo,
    PlayerRanking,
    PlayerRankingInput,
    RankingTrend,
    TiebreakerStats,
    TournamentInfo,
    TournamentRanking,
    TournamentRankingData,
    TrendDirection,
)
from .points import calculate_points, get_points_distribution
from .queries import (
    GetPlayerRankingQuery,
    GetPlayerRankingUseCase,
    GetTournamentRankingQuery,
    GetTournamentRankingUseCase,
)
from .repository import (
    InMemoryTournamentRankingRepository,
    JsonTournamentRankingRepository,
    TournamentRankingRepository,
)
from .schemas import PlayerRankingDTO, TournamentRankingDTO

__all__ = [
    "RankingCalculator",
    "RankingSettings",
    "ranking_settings",
    "RankingError",
    "InvalidArgumentError",
    "DataIntegrityError",
    "Elimina2Score",
    "EliminationRecord",
    "GameDateSummary",
    "PlayerInfo",
    "PlayerRanking",
    "PlayerRankingInput",
    "RankingTrend",
    "TiebreakerStats",
    "TournamentInfo",
    "TournamentRanking",
    "TournamentRankingData",
    "TrendDirection",
    "calculate_points",
    "get_points_distribution",
    "GetPlayerRankingQuery",
    "GetPlayerRankingUseCase",
    "GetTournamentRankingQuery",
    "GetTournamentRankingUseCase",
    "InMemoryTournamentRankingRepository",
    "JsonTournamentRankingRepository",
    "TournamentRankingRepository",
    "PlayerRankingDTO",
    "TournamentRankingDTO",
]
