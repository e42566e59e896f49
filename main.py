"""
토너먼트 랭킹 엔진 메인

JSON 내보내기 파일 또는 Supabase에서 데이터를 읽어 랭킹을 계산하고 출력한다.
"""
import asyncio
import json
import sys
from typing import Optional

from loguru import logger

from ranking.exceptions import DataIntegrityError
from ranking.queries import (
    GetPlayerRankingQuery,
    GetPlayerRankingUseCase,
    GetTournamentRankingQuery,
    GetTournamentRankingUseCase,
)
from ranking.repository import JsonTournamentRankingRepository, TournamentRankingRepository
from ranking.schemas import PlayerRankingDTO, TournamentRankingDTO


def setup_logging(level: str = "INFO"):
    """로깅 설정"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )
    logger.add(
        "logs/ranking_{time:YYYY-MM-DD}.log",
        rotation="1 day",
        retention="30 days",
        level="DEBUG"
    )


def build_repository(source: str, data_file: Optional[str]) -> TournamentRankingRepository:
    """데이터 소스별 저장소 생성"""
    if source == "supabase":
        from database.supabase_client import SupabaseTournamentRankingRepository
        return SupabaseTournamentRankingRepository()

    if not data_file:
        raise ValueError("--source json 에는 --data 파일이 필요합니다")
    return JsonTournamentRankingRepository(data_file)


def print_ranking_summary(ranking: TournamentRankingDTO, top_n: int = 20):
    """랭킹 요약 출력"""
    tournament = ranking.tournament
    print(f"\n{'='*72}")
    print(f" {tournament.name} (#{tournament.number}) - fecha {tournament.completed_dates}/{tournament.total_dates}")
    print(f"{'='*72}")
    print(f"{'순위':>4} {'이름':<20} {'총점':>6} {'최종':>6} {'출전':>4} {'1위':>3} {'2위':>3} {'3위':>3} {'결석':>4} {'변동':>6}")
    print(f"{'-'*72}")

    for r in ranking.rankings[:top_n]:
        name = r.player_name if len(r.player_name) <= 18 else r.player_name[:18] + ".."
        final = "-" if r.final_score is None else str(r.final_score)
        if r.trend == "up":
            trend = f"▲{r.positions_changed}"
        elif r.trend == "down":
            trend = f"▼{r.positions_changed}"
        else:
            trend = "-"
        print(f"{r.position:>4} {name:<20} {r.total_points:>6} {final:>6} {r.dates_played:>4} "
              f"{r.first_places:>3} {r.second_places:>3} {r.third_places:>3} {r.absences:>4} {trend:>6}")


def print_player_ranking(ranking: PlayerRankingDTO):
    """선수 랭킹 출력"""
    alias = f" ({ranking.player_alias})" if ranking.player_alias else ""
    print(f"\n{ranking.position}위 {ranking.player_name}{alias}")
    print(f"  총점: {ranking.total_points}")
    if ranking.final_score is not None:
        print(f"  최종 점수: {ranking.final_score} (제외 {ranking.elimina1}, {ranking.elimina2})")
    print(f"  출전: {ranking.dates_played}, 결석: {ranking.absences}")
    print(f"  1위/2위/3위: {ranking.first_places}/{ranking.second_places}/{ranking.third_places}")
    for date_number, points in sorted(ranking.points_by_date.items()):
        print(f"  fecha {date_number:>2}: {points}")


async def main():
    """메인 함수"""
    import argparse

    parser = argparse.ArgumentParser(description="토너먼트 랭킹 계산기")
    parser.add_argument("--source", choices=["json", "supabase"], default="json", help="데이터 소스")
    parser.add_argument("--data", type=str, help="JSON 데이터 파일")
    parser.add_argument("--tournament", type=int, required=True, help="토너먼트 ID")
    parser.add_argument("--player", type=str, help="선수 ID (생략시 전체 랭킹)")
    parser.add_argument("--top", type=int, default=20, help="출력할 상위 N명")
    parser.add_argument("--json", action="store_true", help="JSON으로 출력")
    parser.add_argument("--log-level", type=str, default="INFO", help="콘솔 로그 레벨")

    args = parser.parse_args()
    setup_logging(args.log_level)

    try:
        repository = build_repository(args.source, args.data)

        if args.player:
            result = await GetPlayerRankingUseCase(repository).execute(
                GetPlayerRankingQuery(tournament_id=args.tournament, player_id=args.player)
            )
        else:
            result = await GetTournamentRankingUseCase(repository).execute(
                GetTournamentRankingQuery(tournament_id=args.tournament)
            )
    except DataIntegrityError as e:
        logger.error(f"데이터 무결성 오류: {e}")
        sys.exit(2)
    except Exception as e:
        logger.error(f"랭킹 계산 오류: {e}")
        sys.exit(1)

    if result is None:
        logger.warning("랭킹을 찾을 수 없습니다")
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_response(), ensure_ascii=False, indent=2))
    elif isinstance(result, TournamentRankingDTO):
        print_ranking_summary(result, top_n=args.top)
    else:
        print_player_ranking(result)


def cli():
    asyncio.run(main())


if __name__ == "__main__":
    cli()
