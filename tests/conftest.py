"""
Pytest configuration and fixtures for tournament ranking tests
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.models import (
    EliminationRecord,
    PlayerInfo,
    PlayerRankingInput,
    TournamentInfo,
    TournamentRankingData,
)


def make_tournament(completed_dates=1, tournament_id=1):
    return TournamentInfo(
        id=tournament_id,
        name="Torneo Apertura",
        number=28,
        total_dates=12,
        completed_dates=completed_dates,
    )


def make_player_input(player_id, results, registered_dates=None, name=None):
    """
    results: {fecha: (position, points)} 또는 {fecha: (position, points, eliminator_id)}
    registered_dates 생략 시 결과가 있는 fecha만 등록
    """
    records = []
    for date_number, result in sorted(results.items()):
        position, points = result[0], result[1]
        eliminator = result[2] if len(result) > 2 else None
        records.append(EliminationRecord(
            date_number=date_number,
            position=position,
            points=points,
            eliminator_player_id=eliminator,
        ))
    if registered_dates is None:
        registered_dates = set(results)
    return PlayerRankingInput(
        player=PlayerInfo(id=player_id, name=name or f"Player {player_id}"),
        records=tuple(records),
        registered_dates=frozenset(registered_dates),
    )


@pytest.fixture
def two_date_data():
    """3명, 2개 fecha

    fecha 1: P1 1위(3), P2 2위(2), P3 3위(1)
    fecha 2: P2 1위(3), P3 2위(2), P1 3위(1)
    """
    players = [
        make_player_input("P1", {1: (1, 3), 2: (3, 1)}),
        make_player_input("P2", {1: (2, 2), 2: (1, 3)}),
        make_player_input("P3", {1: (3, 1), 2: (2, 2)}),
    ]
    return TournamentRankingData(
        tournament=make_tournament(completed_dates=2),
        player_inputs=tuple(players),
    )


@pytest.fixture
def six_date_data():
    """3명, 6개 fecha (ELIMINA 2 적용)

    A: 1위 x4, 3위 x2 → 3*4 + 1*2 = 14, 제외 1+1 → 12
    B: 2위 x6 → 12, 제외 2+2 → 8
    C: 3위 x4, 1위 x2 → 1*4 + 3*2 = 10, 제외 1+1 → 8
    """
    a = {1: (1, 3), 2: (1, 3), 3: (1, 3), 4: (1, 3), 5: (3, 1), 6: (3, 1)}
    b = {d: (2, 2) for d in range(1, 7)}
    c = {1: (3, 1), 2: (3, 1), 3: (3, 1), 4: (3, 1), 5: (1, 3), 6: (1, 3)}
    return TournamentRankingData(
        tournament=make_tournament(completed_dates=6),
        player_inputs=(
            make_player_input("A", a),
            make_player_input("B", b),
            make_player_input("C", c),
        ),
    )
