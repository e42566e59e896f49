"""
랭킹 데이터 모델

입력 스냅샷 (저장소에서 조회)과 계산 결과 값 객체.
결과 객체는 매 조회마다 새로 만들어지며 저장되지 않는다.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


# =====================================================
# 입력 스냅샷
# =====================================================

@dataclass(frozen=True)
class TournamentInfo:
    """토너먼트 정보"""
    id: int
    name: str
    number: int
    total_dates: int
    completed_dates: int


@dataclass(frozen=True)
class PlayerInfo:
    """랭킹 표시용 선수 정보"""
    id: str
    name: str
    alias: Optional[str] = None
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class EliminationRecord:
    """fecha별 탈락 기록 (포인트는 기록 시점에 확정)"""
    date_number: int
    position: int
    points: int
    eliminator_player_id: Optional[str] = None


@dataclass(frozen=True)
class PlayerRankingInput:
    """선수별 원본 데이터

    registered_dates 중 기록이 없는 fecha는 결석(Falta)으로 처리된다.
    """
    player: PlayerInfo
    records: Tuple[EliminationRecord, ...] = ()
    registered_dates: FrozenSet[int] = frozenset()

    def __post_init__(self):
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "registered_dates", frozenset(self.registered_dates))

    def up_to_date(self, max_date_number: int) -> "PlayerRankingInput":
        """1..max_date_number fecha만 남긴 입력"""
        return replace(
            self,
            records=tuple(r for r in self.records if r.date_number <= max_date_number),
            registered_dates=frozenset(d for d in self.registered_dates if d <= max_date_number),
        )


@dataclass(frozen=True)
class GameDateSummary:
    """fecha 전체 참가 현황 (게스트 포함)"""
    date_number: int
    participant_ids: Tuple[str, ...]
    positions: Tuple[int, ...] = ()
    completed: bool = True

    def __post_init__(self):
        object.__setattr__(self, "participant_ids", tuple(self.participant_ids))
        object.__setattr__(self, "positions", tuple(self.positions))

    @property
    def player_count(self) -> int:
        return len(self.participant_ids)


@dataclass(frozen=True)
class TournamentRankingData:
    """저장소가 반환하는 랭킹 계산용 데이터"""
    tournament: TournamentInfo
    player_inputs: Tuple[PlayerRankingInput, ...]
    game_dates: Tuple[GameDateSummary, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "player_inputs", tuple(self.player_inputs))
        object.__setattr__(self, "game_dates", tuple(self.game_dates))

    def up_to_date(self, max_date_number: int) -> "TournamentRankingData":
        """트렌드 계산용: 1..max_date_number fecha 스냅샷"""
        return TournamentRankingData(
            tournament=replace(
                self.tournament,
                completed_dates=min(self.tournament.completed_dates, max_date_number),
            ),
            player_inputs=tuple(p.up_to_date(max_date_number) for p in self.player_inputs),
            game_dates=tuple(g for g in self.game_dates if g.date_number <= max_date_number),
        )


# =====================================================
# 값 객체
# =====================================================

@dataclass(frozen=True)
class TiebreakerStats:
    """동점 처리 기준: 1위 → 2위 → 3위 횟수 (많을수록), 결석 (적을수록)"""
    first_places: int = 0
    second_places: int = 0
    third_places: int = 0
    absences: int = 0

    @property
    def podium_finishes(self) -> int:
        return self.first_places + self.second_places + self.third_places

    def with_position(self, position: int) -> "TiebreakerStats":
        if position == 1:
            return replace(self, first_places=self.first_places + 1)
        if position == 2:
            return replace(self, second_places=self.second_places + 1)
        if position == 3:
            return replace(self, third_places=self.third_places + 1)
        return self

    def with_absence(self) -> "TiebreakerStats":
        return replace(self, absences=self.absences + 1)

    def sort_key(self) -> Tuple[int, int, int, int]:
        return (-self.first_places, -self.second_places, -self.third_places, self.absences)


@dataclass(frozen=True)
class Elimina2Score:
    """ELIMINA 2 점수

    미적용 상태에서는 elimina1/elimina2/final_score가 모두 None이다.
    (적용되어 0인 경우와 구분)
    """
    total_points: int
    elimina1: Optional[int] = None
    elimina2: Optional[int] = None
    final_score: Optional[int] = None

    @classmethod
    def not_applied(cls, total_points: int) -> "Elimina2Score":
        return cls(total_points=total_points)

    @classmethod
    def applied(cls, total_points: int, elimina1: int, elimina2: int) -> "Elimina2Score":
        return cls(
            total_points=total_points,
            elimina1=elimina1,
            elimina2=elimina2,
            final_score=total_points - elimina1 - elimina2,
        )

    @property
    def is_applied(self) -> bool:
        return self.final_score is not None

    @property
    def effective_score(self) -> int:
        """정렬 기준 점수"""
        return self.final_score if self.final_score is not None else self.total_points

    @property
    def eliminated_points(self) -> int:
        if not self.is_applied:
            return 0
        return self.elimina1 + self.elimina2


class TrendDirection(str, Enum):
    """순위 변동 방향"""
    UP = "up"
    DOWN = "down"
    SAME = "same"


@dataclass(frozen=True)
class RankingTrend:
    """직전 fecha 대비 순위 변동"""
    direction: TrendDirection = TrendDirection.SAME
    positions_changed: int = 0

    @classmethod
    def same(cls) -> "RankingTrend":
        return cls()

    @classmethod
    def calculate(cls, previous_position: Optional[int], current_position: int) -> "RankingTrend":
        # 이전 랭킹에 없던 선수는 첫 등장
        if previous_position is None:
            return cls.same()
        if current_position < previous_position:
            return cls(TrendDirection.UP, previous_position - current_position)
        if current_position > previous_position:
            return cls(TrendDirection.DOWN, current_position - previous_position)
        return cls.same()


# =====================================================
# 계산 결과
# =====================================================

@dataclass(frozen=True)
class PlayerRanking:
    """선수 랭킹"""
    player: PlayerInfo
    points_by_date: Dict[int, int]
    dates_played: int
    score: Elimina2Score
    tiebreaker: TiebreakerStats
    position: int = 0
    trend: RankingTrend = field(default_factory=RankingTrend.same)

    @property
    def player_id(self) -> str:
        return self.player.id

    @property
    def player_name(self) -> str:
        return self.player.name

    @property
    def player_alias(self) -> Optional[str]:
        return self.player.alias

    @property
    def player_photo(self) -> Optional[str]:
        return self.player.photo_url

    @property
    def total_points(self) -> int:
        return self.score.total_points

    @property
    def final_score(self) -> Optional[int]:
        return self.score.final_score

    @property
    def elimina1(self) -> Optional[int]:
        return self.score.elimina1

    @property
    def elimina2(self) -> Optional[int]:
        return self.score.elimina2

    @property
    def effective_score(self) -> int:
        return self.score.effective_score

    @property
    def first_places(self) -> int:
        return self.tiebreaker.first_places

    @property
    def second_places(self) -> int:
        return self.tiebreaker.second_places

    @property
    def third_places(self) -> int:
        return self.tiebreaker.third_places

    @property
    def absences(self) -> int:
        return self.tiebreaker.absences

    def get_points_for_date(self, date_number: int) -> int:
        return self.points_by_date.get(date_number, 0)

    def sort_key(self) -> Tuple[int, int, int, int, int]:
        return (-self.effective_score, *self.tiebreaker.sort_key())


@dataclass(frozen=True)
class TournamentRanking:
    """토너먼트 랭킹 (순위 순서로 정렬됨)"""
    tournament: TournamentInfo
    rankings: Tuple[PlayerRanking, ...]
    last_updated: datetime
    elimina2_applied: bool = False

    @property
    def tournament_id(self) -> int:
        return self.tournament.id

    @property
    def completed_dates(self) -> int:
        return self.tournament.completed_dates

    @property
    def player_count(self) -> int:
        return len(self.rankings)

    def get_player_ranking(self, player_id: str) -> Optional[PlayerRanking]:
        for ranking in self.rankings:
            if ranking.player_id == player_id:
                return ranking
        return None

    def get_top_players(self, count: int) -> List[PlayerRanking]:
        return list(self.rankings[:count])

    def get_leader(self) -> Optional[PlayerRanking]:
        return self.rankings[0] if self.rankings else None

    def get_podium(self) -> List[PlayerRanking]:
        return [r for r in self.rankings if r.position <= 3]

    def with_trends(self, previous: Optional["TournamentRanking"]) -> "TournamentRanking":
        """이전 랭킹과 비교한 트렌드를 반영한 새 랭킹"""
        if previous is None:
            rankings = tuple(replace(r, trend=RankingTrend.same()) for r in self.rankings)
            return replace(self, rankings=rankings)

        previous_positions = {r.player_id: r.position for r in previous.rankings}
        rankings = tuple(
            replace(r, trend=RankingTrend.calculate(previous_positions.get(r.player_id), r.position))
            for r in self.rankings
        )
        return replace(self, rankings=rankings)
