"""
순위별 포인트 공식 (ELIMINA 2 시스템)

꼴찌 1점에서 시작해 한 계단 올라갈 때마다 포인트가 늘어난다.
- 하위 구간 (10위 ~ 꼴찌 직전): +1
- 9위: 10위 대비 +1 (하위 구간과 연속)
- 4-8위: +1
- 포디움 (3위, 2위, 1위): +3

참가자가 min_tiered_players 미만인 fecha는 포디움/중간 구간이 성립하지 않으므로
모든 순위가 하위 구간 규칙(한 계단 +1)을 따른다.
"""
from typing import List, Optional

from .config import RankingSettings, ranking_settings
from .exceptions import InvalidArgumentError


PODIUM_SIZE = 3


def _require_int(name: str, value) -> int:
    # bool은 int의 하위 클래스이므로 별도로 거른다
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name}는 정수여야 합니다: {value!r}")
    return value


def _step_above(position: int, settings: RankingSettings) -> int:
    """position+1위 → position위로 올라갈 때 증가하는 포인트"""
    if position <= PODIUM_SIZE:
        return settings.podium_increment
    if position >= settings.bottom_start_position:
        return settings.bottom_increment
    if position == settings.bonus_position:
        return settings.bonus_increment
    return settings.middle_increment


def get_points_distribution(
    total_players: int,
    settings: Optional[RankingSettings] = None
) -> List[int]:
    """
    참가자 수에 대한 전체 포인트 표

    Returns:
        index 0 = 1위, index N-1 = 꼴찌
    """
    settings = settings or ranking_settings
    total_players = _require_int("total_players", total_players)
    if total_players < 1:
        raise InvalidArgumentError(f"참가자 수는 1명 이상이어야 합니다: {total_players}")

    points = [0] * total_players
    points[-1] = settings.last_place_points

    tiered = total_players >= settings.min_tiered_players
    for position in range(total_players - 1, 0, -1):
        step = _step_above(position, settings) if tiered else settings.bottom_increment
        points[position - 1] = points[position] + step

    return points


def calculate_points(
    position: int,
    total_players: int,
    settings: Optional[RankingSettings] = None
) -> int:
    """
    탈락 순위 → 포인트

    범위를 벗어난 순위는 보정하지 않고 InvalidArgumentError를 발생시킨다.
    """
    position = _require_int("position", position)
    total_players = _require_int("total_players", total_players)

    if total_players < 1:
        raise InvalidArgumentError(f"참가자 수는 1명 이상이어야 합니다: {total_players}")
    if position < 1 or position > total_players:
        raise InvalidArgumentError(
            f"순위는 1 이상 {total_players} 이하여야 합니다: {position}"
        )

    return get_points_distribution(total_players, settings)[position - 1]
