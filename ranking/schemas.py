"""
랭킹 스키마 정의

- 출력 DTO: API/UI 계층으로 전달되는 랭킹 응답 (camelCase)
- 입력 스키마: JSON 내보내기 등 원본 데이터를 도메인 모델로 변환
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .config import ranking_settings
from .models import (
    EliminationRecord,
    GameDateSummary,
    PlayerInfo,
    PlayerRanking,
    PlayerRankingInput,
    TournamentInfo,
    TournamentRanking,
    TournamentRankingData,
)


# ==================== 출력 DTO ====================

class TournamentSummaryDTO(BaseModel):
    """토너먼트 요약"""
    id: int = Field(..., description="토너먼트 ID")
    name: str = Field(..., description="토너먼트명")
    number: int = Field(..., description="토너먼트 번호")
    total_dates: int = Field(..., description="전체 fecha 수")
    completed_dates: int = Field(..., description="완료 fecha 수")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PlayerRankingDTO(BaseModel):
    """선수 랭킹 응답"""
    position: int = Field(..., ge=1, description="순위")
    player_id: str = Field(..., description="선수 ID")
    player_name: str = Field(..., description="선수명")
    player_alias: Optional[str] = Field(None, description="별명")
    player_photo: Optional[str] = Field(None, description="사진 URL")
    total_points: int = Field(..., description="총 포인트")
    dates_played: int = Field(..., ge=0, description="출전 fecha 수 (결석 제외)")
    points_by_date: Dict[int, int] = Field(default_factory=dict, description="fecha별 포인트")
    trend: Literal["up", "down", "same"] = Field(default="same", description="순위 변동 방향")
    positions_changed: int = Field(default=0, ge=0, description="변동 순위 수")
    elimina1: Optional[int] = Field(None, description="제외된 최저 점수")
    elimina2: Optional[int] = Field(None, description="제외된 두 번째 최저 점수")
    final_score: Optional[int] = Field(None, description="ELIMINA 2 적용 점수")
    first_places: int = Field(default=0, ge=0, description="1위 횟수")
    second_places: int = Field(default=0, ge=0, description="2위 횟수")
    third_places: int = Field(default=0, ge=0, description="3위 횟수")
    absences: int = Field(default=0, ge=0, description="결석 횟수")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_ranking(cls, ranking: PlayerRanking) -> "PlayerRankingDTO":
        return cls(
            position=ranking.position,
            player_id=ranking.player_id,
            player_name=ranking.player_name,
            player_alias=ranking.player_alias,
            player_photo=ranking.player_photo,
            total_points=ranking.total_points,
            dates_played=ranking.dates_played,
            points_by_date=dict(ranking.points_by_date),
            trend=ranking.trend.direction.value,
            positions_changed=ranking.trend.positions_changed,
            elimina1=ranking.elimina1,
            elimina2=ranking.elimina2,
            final_score=ranking.final_score,
            first_places=ranking.first_places,
            second_places=ranking.second_places,
            third_places=ranking.third_places,
            absences=ranking.absences,
        )

    def to_response(self) -> Dict[str, Any]:
        """camelCase 응답 (값이 없는 선택 필드는 생략)"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class TournamentRankingDTO(BaseModel):
    """토너먼트 랭킹 응답"""
    tournament: TournamentSummaryDTO
    rankings: List[PlayerRankingDTO] = Field(default_factory=list)
    last_updated: datetime = Field(..., description="계산 시각")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def from_ranking(cls, ranking: TournamentRanking) -> "TournamentRankingDTO":
        tournament = ranking.tournament
        return cls(
            tournament=TournamentSummaryDTO(
                id=tournament.id,
                name=tournament.name,
                number=tournament.number,
                total_dates=tournament.total_dates,
                completed_dates=tournament.completed_dates,
            ),
            rankings=[PlayerRankingDTO.from_ranking(r) for r in ranking.rankings],
            last_updated=ranking.last_updated,
        )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# ==================== 입력 스키마 ====================

class EliminationRecordSchema(BaseModel):
    """탈락 기록"""
    date_number: int = Field(..., description="fecha 번호")
    position: int = Field(..., description="탈락 순위")
    points: int = Field(..., description="기록된 포인트")
    eliminator_player_id: Optional[str] = Field(None, description="탈락시킨 선수 ID")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PlayerInputSchema(BaseModel):
    """선수별 원본 데이터"""
    player_id: str = Field(..., min_length=1, description="선수 ID")
    player_name: str = Field(..., min_length=1, description="선수명")
    player_alias: Optional[str] = Field(None, description="별명")
    player_photo: Optional[str] = Field(None, description="사진 URL")
    records: List[EliminationRecordSchema] = Field(default_factory=list)
    registered_dates: List[int] = Field(default_factory=list, description="참가 등록 fecha 번호")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_domain(self) -> PlayerRankingInput:
        return PlayerRankingInput(
            player=PlayerInfo(
                id=self.player_id,
                name=self.player_name,
                alias=self.player_alias,
                photo_url=self.player_photo,
            ),
            records=tuple(
                EliminationRecord(
                    date_number=r.date_number,
                    position=r.position,
                    points=r.points,
                    eliminator_player_id=r.eliminator_player_id,
                )
                for r in self.records
            ),
            registered_dates=frozenset(self.registered_dates),
        )


class GameDateSchema(BaseModel):
    """fecha 참가 현황"""
    date_number: int = Field(..., ge=1, description="fecha 번호")
    participant_ids: List[str] = Field(default_factory=list, description="참가자 ID (게스트 포함)")
    positions: List[int] = Field(default_factory=list, description="기록된 탈락 순위")
    completed: bool = Field(default=True, description="완료 여부")

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_domain(self) -> GameDateSummary:
        return GameDateSummary(
            date_number=self.date_number,
            participant_ids=tuple(self.participant_ids),
            positions=tuple(self.positions),
            completed=self.completed,
        )


class TournamentSchema(BaseModel):
    """토너먼트 정보"""
    id: int = Field(..., description="토너먼트 ID")
    name: str = Field(..., min_length=1, description="토너먼트명")
    number: int = Field(..., ge=0, description="토너먼트 번호")
    total_dates: int = Field(
        default_factory=lambda: ranking_settings.total_dates_per_tournament,
        ge=1,
        description="전체 fecha 수",
    )
    completed_dates: int = Field(default=0, ge=0, description="완료 fecha 수")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TournamentRankingDataSchema(BaseModel):
    """랭킹 계산용 토너먼트 데이터 (JSON 내보내기 형식)"""
    tournament: TournamentSchema
    players: List[PlayerInputSchema] = Field(default_factory=list)
    game_dates: List[GameDateSchema] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_domain(self) -> TournamentRankingData:
        t = self.tournament
        return TournamentRankingData(
            tournament=TournamentInfo(
                id=t.id,
                name=t.name,
                number=t.number,
                total_dates=t.total_dates,
                completed_dates=t.completed_dates,
            ),
            player_inputs=tuple(p.to_domain() for p in self.players),
            game_dates=tuple(g.to_domain() for g in self.game_dates),
        )
