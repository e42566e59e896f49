"""
랭킹 데이터 저장소

TournamentRankingRepository: 유스케이스가 의존하는 조회 포트
- InMemoryTournamentRankingRepository: 메모리 데이터 (테스트, 캐시된 스냅샷)
- JsonTournamentRankingRepository: JSON 내보내기 파일
Supabase 구현은 database.supabase_client 참고
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Protocol, Union, runtime_checkable

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from .models import TournamentRankingData
from .schemas import TournamentRankingDataSchema


@runtime_checkable
class TournamentRankingRepository(Protocol):
    """랭킹 계산용 데이터 조회 포트

    토너먼트가 없으면 None을 반환한다.
    조회 실패는 예외로 전달한다 (재시도는 구현체의 책임).
    """

    async def get_tournament_ranking_data(
        self, tournament_id: int
    ) -> Optional[TournamentRankingData]:
        """완료된 모든 fecha 데이터"""
        ...

    async def get_tournament_ranking_data_up_to_date(
        self, tournament_id: int, max_date_number: int
    ) -> Optional[TournamentRankingData]:
        """1..max_date_number fecha 데이터 (트렌드 계산용)"""
        ...


class InMemoryTournamentRankingRepository:
    """메모리 저장소"""

    def __init__(self, data: Iterable[TournamentRankingData] = ()):
        self._data: Dict[int, TournamentRankingData] = {}
        for item in data:
            self.add(item)

    def add(self, data: TournamentRankingData) -> None:
        self._data[data.tournament.id] = data

    async def get_tournament_ranking_data(
        self, tournament_id: int
    ) -> Optional[TournamentRankingData]:
        return self._data.get(tournament_id)

    async def get_tournament_ranking_data_up_to_date(
        self, tournament_id: int, max_date_number: int
    ) -> Optional[TournamentRankingData]:
        data = self._data.get(tournament_id)
        if data is None:
            return None
        return data.up_to_date(max_date_number)


def parse_ranking_data(raw: Dict[str, Any]) -> TournamentRankingData:
    """원본 dict → 도메인 데이터 (스키마 검증 실패 시 pydantic 예외 전달)"""
    return TournamentRankingDataSchema(**raw).to_domain()


class JsonTournamentRankingRepository(InMemoryTournamentRankingRepository):
    """JSON 내보내기 파일 저장소

    파일 형식: 토너먼트 1개 객체 또는 {"tournaments": [...]}
    """

    def __init__(self, data_file: Union[str, Path]):
        super().__init__()
        self.data_file = Path(data_file)
        self.load_data()

    def load_data(self) -> None:
        """JSON 데이터 로드"""
        with open(self.data_file, "r", encoding="utf-8") as f:
            raw = json.load(f)

        items = raw.get("tournaments", [raw]) if isinstance(raw, dict) else raw
        for item in items:
            try:
                self.add(parse_ranking_data(item))
            except PydanticValidationError as e:
                logger.error(f"랭킹 데이터 형식 오류 ({self.data_file}): {e}")
                raise

        logger.info(f"데이터 로드 완료: {len(self._data)}개 토너먼트 ({self.data_file})")
