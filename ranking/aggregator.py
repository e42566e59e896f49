"""
탈락 기록 집계

선수별 fecha 기록을 fecha별 포인트, 출전 수, 동점 처리 통계로 변환한다.
잘못된 데이터는 보정하지 않고 DataIntegrityError로 거부한다.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from loguru import logger

from .exceptions import (
    DataIntegrityError,
    DUPLICATE_ELIMINATION,
    DUPLICATE_GAME_DATE,
    DUPLICATE_POSITION,
    INCOMPLETE_GAME_DATE,
    INVALID_ELIMINATOR,
    POSITION_GAP,
    POSITION_OUT_OF_RANGE,
    UNREGISTERED_ELIMINATION,
)
from .models import GameDateSummary, PlayerRankingInput, TiebreakerStats


@dataclass(frozen=True)
class PlayerAggregate:
    """선수 집계 결과"""
    points_by_date: Dict[int, int]
    dates_played: int
    tiebreaker: TiebreakerStats

    @property
    def total_points(self) -> int:
        return sum(self.points_by_date.values())


class EliminationAggregator:
    """선수 한 명의 fecha별 기록 집계"""

    def __init__(self, tournament_id: Optional[int] = None):
        self.tournament_id = tournament_id

    def aggregate(self, player_input: PlayerRankingInput) -> PlayerAggregate:
        player_id = player_input.player.id
        records_by_date = {}

        for record in player_input.records:
            if record.date_number < 1 or record.position < 1:
                raise DataIntegrityError(
                    POSITION_OUT_OF_RANGE,
                    f"잘못된 fecha/순위: fecha {record.date_number}, 순위 {record.position}",
                    tournament_id=self.tournament_id,
                    date_number=record.date_number,
                    player_id=player_id,
                )
            if record.date_number in records_by_date:
                raise DataIntegrityError(
                    DUPLICATE_ELIMINATION,
                    "같은 fecha에 탈락 기록이 2개 이상입니다",
                    tournament_id=self.tournament_id,
                    date_number=record.date_number,
                    player_id=player_id,
                )
            if record.date_number not in player_input.registered_dates:
                raise DataIntegrityError(
                    UNREGISTERED_ELIMINATION,
                    "참가 등록되지 않은 fecha에 탈락 기록이 있습니다",
                    tournament_id=self.tournament_id,
                    date_number=record.date_number,
                    player_id=player_id,
                )
            records_by_date[record.date_number] = record

        points_by_date = {}
        dates_played = 0
        tiebreaker = TiebreakerStats()

        for date_number in sorted(player_input.registered_dates):
            record = records_by_date.get(date_number)
            if record is None:
                # 결석: 0점, 출전 수 제외
                points_by_date[date_number] = 0
                tiebreaker = tiebreaker.with_absence()
                continue

            points_by_date[date_number] = record.points
            dates_played += 1
            tiebreaker = tiebreaker.with_position(record.position)

        return PlayerAggregate(
            points_by_date=points_by_date,
            dates_played=dates_played,
            tiebreaker=tiebreaker,
        )


def _check_positions(
    positions: Sequence[int],
    date_number: int,
    tournament_id: Optional[int],
) -> List[int]:
    """중복/누락 없는 연속 순위인지 확인하고 정렬된 목록 반환"""
    ordered = sorted(positions)
    for previous, current in zip(ordered, ordered[1:]):
        if current == previous:
            raise DataIntegrityError(
                DUPLICATE_POSITION,
                f"순위 {current}이(가) 중복 기록되었습니다",
                tournament_id=tournament_id,
                date_number=date_number,
            )
        if current != previous + 1:
            raise DataIntegrityError(
                POSITION_GAP,
                f"순위 {previous}와 {current} 사이가 비어 있습니다",
                tournament_id=tournament_id,
                date_number=date_number,
            )
    return ordered


def _check_summary(summary: GameDateSummary, tournament_id: Optional[int]) -> None:
    ordered = _check_positions(summary.positions, summary.date_number, tournament_id)
    if not ordered:
        return

    field_size = summary.player_count
    if ordered[0] < 1 or ordered[-1] > field_size:
        raise DataIntegrityError(
            POSITION_OUT_OF_RANGE,
            f"순위는 1 이상 {field_size} 이하여야 합니다: {ordered[0]}-{ordered[-1]}",
            tournament_id=tournament_id,
            date_number=summary.date_number,
        )
    # 탈락은 꼴찌부터 기록된다
    if ordered[-1] != field_size:
        raise DataIntegrityError(
            POSITION_GAP,
            f"마지막 순위 기록({ordered[-1]})이 참가자 수({field_size})와 다릅니다",
            tournament_id=tournament_id,
            date_number=summary.date_number,
        )
    if summary.completed and len(ordered) != field_size:
        raise DataIntegrityError(
            INCOMPLETE_GAME_DATE,
            f"완료된 fecha의 순위 기록이 {len(ordered)}/{field_size}개뿐입니다",
            tournament_id=tournament_id,
            date_number=summary.date_number,
        )


def validate_game_dates(
    player_inputs: Iterable[PlayerRankingInput],
    game_dates: Iterable[GameDateSummary] = (),
    tournament_id: Optional[int] = None,
) -> None:
    """
    fecha 단위 무결성 검증

    fecha 요약이 있으면 요약(게스트 포함)을 기준으로, 없으면 랭킹 대상 선수들의
    기록만으로 순위 연속성을 확인한다.
    """
    player_inputs = list(player_inputs)

    summaries: Dict[int, GameDateSummary] = {}
    for summary in game_dates:
        if summary.date_number in summaries:
            raise DataIntegrityError(
                DUPLICATE_GAME_DATE,
                "같은 번호의 fecha가 2개 이상입니다",
                tournament_id=tournament_id,
                date_number=summary.date_number,
            )
        summaries[summary.date_number] = summary

    # fecha → {player_id: position}
    positions_by_date: Dict[int, Dict[str, int]] = defaultdict(dict)
    for player_input in player_inputs:
        for record in player_input.records:
            positions_by_date[record.date_number][player_input.player.id] = record.position

    for summary in summaries.values():
        _check_summary(summary, tournament_id)

    for date_number, player_positions in sorted(positions_by_date.items()):
        summary = summaries.get(date_number)
        if summary is None:
            _check_positions(list(player_positions.values()), date_number, tournament_id)
            continue

        # 게스트 순위가 섞여 있으므로 랭킹 대상 선수끼리는 중복만 확인
        seen = set()
        for position in player_positions.values():
            if position in seen:
                raise DataIntegrityError(
                    DUPLICATE_POSITION,
                    f"순위 {position}이(가) 중복 기록되었습니다",
                    tournament_id=tournament_id,
                    date_number=date_number,
                )
            seen.add(position)

        participants = set(summary.participant_ids)
        recorded = set(summary.positions)
        for player_id, position in player_positions.items():
            if player_id not in participants or position not in recorded:
                raise DataIntegrityError(
                    UNREGISTERED_ELIMINATION,
                    f"fecha 참가자 목록에 없는 탈락 기록입니다 (순위 {position})",
                    tournament_id=tournament_id,
                    date_number=date_number,
                    player_id=player_id,
                )

    _validate_eliminators(player_inputs, positions_by_date, tournament_id)
    logger.debug(f"fecha 무결성 검증 완료: {len(positions_by_date)}개 fecha")


def _validate_eliminators(
    player_inputs: List[PlayerRankingInput],
    positions_by_date: Dict[int, Dict[str, int]],
    tournament_id: Optional[int],
) -> None:
    """탈락시킨 선수가 그보다 먼저 탈락했다면 오류"""
    for player_input in player_inputs:
        for record in player_input.records:
            eliminator_id = record.eliminator_player_id
            if not eliminator_id:
                continue
            eliminator_position = positions_by_date.get(record.date_number, {}).get(eliminator_id)
            if eliminator_position is not None and eliminator_position > record.position:
                raise DataIntegrityError(
                    INVALID_ELIMINATOR,
                    f"{eliminator_id}은(는) {eliminator_position}위로 먼저 탈락했으므로 "
                    f"{record.position}위를 탈락시킬 수 없습니다",
                    tournament_id=tournament_id,
                    date_number=record.date_number,
                    player_id=player_input.player.id,
                )
