import datetime as dt
from datetime import date, datetime, time
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field

TransactionType = Literal["income", "expense"]
Priority = Literal["low", "medium", "high"]
TaskCategory = Literal["academic", "personal"]
AttendanceStatus = Literal["on-time", "late", "absent"]
ReminderType = Literal["bill", "task"]
Recurrence = Literal["none", "daily", "weekly", "monthly"]


def new_record_id() -> str:
    return uuid4().hex


class Transaction(BaseModel):
    id: str = Field(default_factory=new_record_id)
    type: TransactionType
    amount: float
    category: str
    description: str
    date: dt.date = Field(default_factory=date.today)
    auto_suggested: bool = False


class CategorySuggestion(BaseModel):
    category: str
    confidence: float  # 0 to 100
    reason: str


class SpendingInsight(BaseModel):
    category: str
    amount: float
    percentage: float
    is_high_spending: bool


class BudgetProgress(BaseModel):
    category: str
    spent: float
    limit: float
    percentage: int


class BudgetSummary(BaseModel):
    total_income: float
    total_expenses: float
    balance: float
    expenses_by_category: dict[str, float]
    progress: list[BudgetProgress]
    insights: list[str]


class Task(BaseModel):
    id: str = Field(default_factory=new_record_id)
    title: str
    description: str = ""
    category: TaskCategory = "academic"
    priority: Priority = "medium"
    due_date: date
    completed: bool = False
    created_at: date = Field(default_factory=date.today)


class AttendanceRecord(BaseModel):
    id: str = Field(default_factory=new_record_id)
    date: dt.date
    subject: str
    scheduled_time: time
    actual_time: time | None = None
    status: AttendanceStatus = "on-time"
    notes: str = ""


class Reminder(BaseModel):
    id: str = Field(default_factory=new_record_id)
    type: ReminderType = "task"
    title: str
    description: str = ""
    due_date: date
    due_time: time | None = time(9, 0)
    amount: float | None = None
    category: str | None = None
    priority: Priority = "medium"
    is_completed: bool = False
    notification_sent: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    recurrence: Recurrence = "none"


class UserProfile(BaseModel):
    first_name: str
    last_name: str = ""
    email: str
    profile_photo: str = ""


class LifestyleAssessment(BaseModel):
    sleep_habits: str = Field(description="Assessment of sleep patterns and quality")
    exercise_frequency: Literal["sedentary", "light", "moderate", "active", "very_active"] = Field(
        description="Weekly exercise frequency"
    )
    diet_quality: Literal["poor", "fair", "good", "excellent"] = Field(
        description="Overall diet quality assessment"
    )
    stress_level: Literal["low", "moderate", "high", "very_high"] = Field(description="Current stress level")
    work_life_balance: Literal["poor", "fair", "good", "excellent"] = Field(
        description="Balance between studies, work and rest"
    )
    social_connection: Literal["isolated", "limited", "moderate", "strong"] = Field(
        description="Level of social connection"
    )
    mental_health_status: Literal["struggling", "fair", "good", "excellent"] = Field(
        description="Overall mental health assessment"
    )
    time_management: Literal["poor", "fair", "good", "excellent"] = Field(
        description="Time management effectiveness"
    )
    financial_wellness: Literal["struggling", "fair", "stable", "thriving"] = Field(
        description="Financial health based on spending patterns"
    )
    overall_score: float = Field(ge=0, le=100, description="Overall lifestyle wellness score (0-100)")
    strengths: list[str] = Field(default_factory=list, description="Key lifestyle strengths identified")
    areas_for_improvement: list[str] = Field(default_factory=list, description="Areas that need improvement")
    recommendations: list[str] = Field(default_factory=list, description="Personalized recommendations")
    risk_factors: list[str] = Field(default_factory=list, description="Potential risk factors or concerns")
