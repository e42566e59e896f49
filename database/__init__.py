"""
Supabase 데이터베이스 어댑터
"""
