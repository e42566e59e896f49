"""
Supabase 데이터베이스 클라이언트

랭킹 계산에 필요한 토너먼트/참가자/fecha/탈락 기록을 조회하여
ranking 도메인 모델로 변환한다.
"""
from typing import Any, Dict, List, Optional

from loguru import logger
from supabase import Client, create_client

from ranking.config import ranking_settings, supabase_config
from ranking.models import (
    EliminationRecord,
    GameDateSummary,
    PlayerInfo,
    PlayerRankingInput,
    TournamentInfo,
    TournamentRankingData,
)
from ranking.points import calculate_points


# 싱글톤 클라이언트
_supabase_client: Optional[Client] = None

# 랭킹 계산 대상 fecha 상태
RANKED_DATE_STATUSES = ["completed", "in_progress"]


def get_supabase_client() -> Client:
    """Supabase 클라이언트 인스턴스 반환 (싱글톤)"""
    global _supabase_client
    if _supabase_client is None:
        if not supabase_config.supabase_url or not supabase_config.supabase_key:
            raise ValueError("SUPABASE_URL과 SUPABASE_KEY 환경변수를 설정해주세요")
        _supabase_client = create_client(
            supabase_config.supabase_url,
            supabase_config.supabase_key
        )
    return _supabase_client


class SupabaseTournamentRankingRepository:
    """Supabase 기반 랭킹 데이터 저장소

    테이블
    - tournaments: id, name, number
    - tournament_participants: tournament_id, player_id → players
    - players: id, first_name, last_name, aliases, photo_url
    - game_dates: id, tournament_id, date_number, status, player_ids
    - eliminations: game_date_id, position, points, eliminated_player_id, eliminator_player_id
    """

    def __init__(self, client: Optional[Client] = None):
        self.client: Client = client or get_supabase_client()

    async def get_tournament_ranking_data(
        self, tournament_id: int
    ) -> Optional[TournamentRankingData]:
        return await self._load(tournament_id)

    async def get_tournament_ranking_data_up_to_date(
        self, tournament_id: int, max_date_number: int
    ) -> Optional[TournamentRankingData]:
        return await self._load(tournament_id, max_date_number)

    async def _load(
        self, tournament_id: int, max_date_number: Optional[int] = None
    ) -> Optional[TournamentRankingData]:
        try:
            tournament = self._fetch_tournament(tournament_id)
            if tournament is None:
                return None

            participants = self._fetch_participants(tournament_id)
            game_dates = self._fetch_game_dates(tournament_id, max_date_number)
            eliminations = self._fetch_eliminations([g["id"] for g in game_dates])
        except Exception as e:
            logger.error(f"랭킹 데이터 조회 오류 (토너먼트 {tournament_id}): {e}")
            raise

        return self._to_ranking_data(tournament, participants, game_dates, eliminations)

    # ==================== 조회 ====================

    def _fetch_tournament(self, tournament_id: int) -> Optional[Dict[str, Any]]:
        result = self.client.table("tournaments").select("id, name, number").eq(
            "id", tournament_id
        ).limit(1).execute()

        if result.data:
            return result.data[0]
        return None

    def _fetch_participants(self, tournament_id: int) -> List[Dict[str, Any]]:
        result = self.client.table("tournament_participants").select(
            "player_id, players(id, first_name, last_name, aliases, photo_url)"
        ).eq("tournament_id", tournament_id).execute()
        return result.data or []

    def _fetch_game_dates(
        self, tournament_id: int, max_date_number: Optional[int]
    ) -> List[Dict[str, Any]]:
        query = self.client.table("game_dates").select(
            "id, date_number, status, player_ids"
        ).eq("tournament_id", tournament_id).in_("status", RANKED_DATE_STATUSES)

        if max_date_number is not None:
            query = query.lte("date_number", max_date_number)

        result = query.order("date_number").execute()
        return result.data or []

    def _fetch_eliminations(self, game_date_ids: List[int]) -> List[Dict[str, Any]]:
        if not game_date_ids:
            return []

        result = self.client.table("eliminations").select(
            "game_date_id, position, points, eliminated_player_id, eliminator_player_id"
        ).in_("game_date_id", game_date_ids).execute()
        return result.data or []

    # ==================== 변환 ====================

    def _to_ranking_data(
        self,
        tournament: Dict[str, Any],
        participants: List[Dict[str, Any]],
        game_dates: List[Dict[str, Any]],
        eliminations: List[Dict[str, Any]],
    ) -> TournamentRankingData:
        eliminations_by_date: Dict[int, List[Dict[str, Any]]] = {}
        for elimination in eliminations:
            eliminations_by_date.setdefault(elimination["game_date_id"], []).append(elimination)

        players = [self._to_player_info(p) for p in participants]
        records: Dict[str, List[EliminationRecord]] = {p.id: [] for p in players}
        # 진행 중인 fecha에서 아직 탈락하지 않은 선수 (결석 아님)
        still_playing: Dict[str, set] = {p.id: set() for p in players}
        summaries = []

        for game_date in game_dates:
            date_number = game_date["date_number"]
            player_ids = list(game_date.get("player_ids") or [])
            date_eliminations = eliminations_by_date.get(game_date["id"], [])
            completed = game_date.get("status") == "completed"

            eliminated_ids = {e["eliminated_player_id"] for e in date_eliminations}
            for e in date_eliminations:
                player_id = e["eliminated_player_id"]
                if player_id in records:
                    records[player_id].append(EliminationRecord(
                        date_number=date_number,
                        position=e["position"],
                        points=e["points"],
                        eliminator_player_id=e.get("eliminator_player_id"),
                    ))

            positions = [e["position"] for e in date_eliminations]
            remaining = [pid for pid in player_ids if pid not in eliminated_ids]

            # 우승자 추론: 완료되었거나 한 명만 남은 경우
            if remaining and (completed or len(remaining) == 1):
                winner_id = remaining[0]
                winner_points = self._winner_points(date_eliminations, len(player_ids))
                positions.append(1)
                if winner_id in records:
                    records[winner_id].append(EliminationRecord(
                        date_number=date_number,
                        position=1,
                        points=winner_points,
                    ))
                remaining = []

            for player_id in remaining:
                if player_id in still_playing:
                    still_playing[player_id].add(date_number)

            summaries.append(GameDateSummary(
                date_number=date_number,
                participant_ids=tuple(player_ids),
                positions=tuple(positions),
                completed=completed,
            ))

        ranked_dates = [g["date_number"] for g in game_dates]
        player_inputs = tuple(
            PlayerRankingInput(
                player=player,
                records=tuple(records[player.id]),
                registered_dates=frozenset(
                    d for d in ranked_dates if d not in still_playing[player.id]
                ),
            )
            for player in players
        )

        return TournamentRankingData(
            tournament=TournamentInfo(
                id=tournament["id"],
                name=tournament["name"],
                number=tournament["number"],
                total_dates=ranking_settings.total_dates_per_tournament,
                completed_dates=len(game_dates),
            ),
            player_inputs=player_inputs,
            game_dates=tuple(summaries),
        )

    @staticmethod
    def _to_player_info(participant: Dict[str, Any]) -> PlayerInfo:
        player = participant.get("players") or {}
        first_name = player.get("first_name") or ""
        last_name = player.get("last_name") or ""
        aliases = player.get("aliases") or []
        return PlayerInfo(
            id=player.get("id") or participant["player_id"],
            name=f"{first_name} {last_name}".strip(),
            alias=aliases[0] if aliases else None,
            photo_url=player.get("photo_url") or None,
        )

    @staticmethod
    def _winner_points(date_eliminations: List[Dict[str, Any]], total_players: int) -> int:
        """2위 기록 포인트 + 1위/2위 포인트 차이 (2위 기록이 없으면 포인트 표)"""
        second_place = next((e for e in date_eliminations if e["position"] == 2), None)
        if second_place is None or total_players < 2:
            return calculate_points(1, total_players)
        step = calculate_points(1, total_players) - calculate_points(2, total_players)
        return second_place["points"] + step
