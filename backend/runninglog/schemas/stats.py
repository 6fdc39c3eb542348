from pydantic import BaseModel


class RunSummary(BaseModel):
    days_run: int
    total_distance: float
    avg_distance: float
    min_distance: float
    max_distance: float


class MonthlyRecord(BaseModel):
    month: str  # 'YYYY-MM'
    days_run: int
    cumulative_days_run: int
    total_distance: float
    cumulative_distance: float


class YearlyRecord(BaseModel):
    year: int
    days_run: int
    cumulative_days_run: int
    total_distance: float
    cumulative_distance: float
