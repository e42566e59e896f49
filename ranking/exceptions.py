"""
랭킹 엔진 예외 정의

- InvalidArgumentError: 잘못된 입력값 (포인트 공식 등)
- DataIntegrityError: 원본 탈락 데이터의 무결성 위반
"""
from typing import Optional


class RankingError(Exception):
    """랭킹 엔진 기본 예외"""


class InvalidArgumentError(RankingError, ValueError):
    """잘못된 인자"""


class DataIntegrityError(RankingError):
    """탈락 데이터 무결성 위반

    랭킹을 부분적으로 계산하지 않고 호출자에게 즉시 전달한다.
    원본 데이터를 수정한 뒤 다시 계산해야 한다.
    """

    def __init__(
        self,
        error_type: str,
        message: str,
        tournament_id: Optional[int] = None,
        date_number: Optional[int] = None,
        player_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.tournament_id = tournament_id
        self.date_number = date_number
        self.player_id = player_id

    def __str__(self) -> str:
        context = []
        if self.tournament_id is not None:
            context.append(f"tournament={self.tournament_id}")
        if self.date_number is not None:
            context.append(f"fecha={self.date_number}")
        if self.player_id is not None:
            context.append(f"player={self.player_id}")
        suffix = f" ({', '.join(context)})" if context else ""
        return f"[{self.error_type}] {self.message}{suffix}"


# 무결성 오류 유형
DUPLICATE_ELIMINATION = "DUPLICATE_ELIMINATION"
DUPLICATE_POSITION = "DUPLICATE_POSITION"
POSITION_GAP = "POSITION_GAP"
POSITION_OUT_OF_RANGE = "POSITION_OUT_OF_RANGE"
UNREGISTERED_ELIMINATION = "UNREGISTERED_ELIMINATION"
INVALID_ELIMINATOR = "INVALID_ELIMINATOR"
DUPLICATE_GAME_DATE = "DUPLICATE_GAME_DATE"
INCOMPLETE_GAME_DATE = "INCOMPLETE_GAME_DATE"
