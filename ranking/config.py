"""
랭킹 엔진 설정
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()


class RankingSettings(BaseSettings):
    """랭킹 계산 설정"""

    # ELIMINA 2 (최저 2개 fecha 제외)
    elimina2_min_completed_dates: int = Field(default=6, description="ELIMINA 2 적용 최소 완료 fecha 수")
    total_dates_per_tournament: int = Field(default=12, description="토너먼트당 fecha 수")

    # 트렌드
    trend_min_completed_dates: int = Field(default=2, description="트렌드 계산 최소 완료 fecha 수")

    # 순위별 포인트 (계단식)
    min_tiered_players: int = Field(default=9, description="계단식 공식 적용 최소 인원")
    bottom_start_position: int = Field(default=10, description="하위 구간 시작 순위")
    bonus_position: int = Field(default=9, description="하위 구간과 중간 구간 사이 순위")
    bottom_increment: int = Field(default=1, description="하위 구간 순위당 증가분")
    bonus_increment: int = Field(default=1, description="10위 → 9위 증가분")
    middle_increment: int = Field(default=1, description="4-8위 순위당 증가분")
    podium_increment: int = Field(default=3, description="1-3위 순위당 증가분")
    last_place_points: int = Field(default=1, description="꼴찌 포인트")

    class Config:
        env_prefix = "RANKING_"
        case_sensitive = False


class SupabaseConfig(BaseSettings):
    """Supabase 설정"""

    supabase_url: str = Field(default="", description="Supabase Project URL")
    supabase_key: str = Field(default="", description="Supabase anon key")

    class Config:
        env_prefix = ""
        case_sensitive = False


# 전역 설정 인스턴스
ranking_settings = RankingSettings()
supabase_config = SupabaseConfig()
