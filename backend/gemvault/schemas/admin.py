"""Schemas for the admin dashboard."""

from datetime import date, datetime

from pydantic import BaseModel


class DashboardTotals(BaseModel):
    """Headline counts for the dashboard."""

    total_gemstones: int
    gemstones_with_current_owner: int
    gemstones_without_owner: int
    total_owner_records: int


class RecentGemstone(BaseModel):
    id: int
    unique_id_number: str
    name: str
    created_at: datetime


class RecentOwner(BaseModel):
    id: int
    gemstone_id: int
    gemstone_name: str
    owner_name: str
    ownership_start_date: date
    is_current_owner: bool


class DashboardStats(BaseModel):
    """Admin dashboard statistics."""

    totals: DashboardTotals
    recent_gemstones: list[RecentGemstone]
    recent_owners: list[RecentOwner]
