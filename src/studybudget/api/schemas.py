from typing import Any

from pydantic import BaseModel

from studybudget.models import LifestyleAssessment


class SuggestRequest(BaseModel):
    description: str


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class SignupRequest(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    terms_accepted: bool = False


class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    profile_photo: str | None = None


class PasswordChangeRequest(BaseModel):
    current_password: str = ""
    new_password: str
    confirm_password: str


class AssessmentRequest(BaseModel):
    responses: dict[str, Any]


class InsightsRequest(BaseModel):
    assessment: LifestyleAssessment


class MotivationRequest(BaseModel):
    area: str


class TextResponse(BaseModel):
    text: str
