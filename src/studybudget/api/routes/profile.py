from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from studybudget.api.dependencies import get_profile_store
from studybudget.api.schemas import LoginRequest, PasswordChangeRequest, ProfileUpdate, SignupRequest
from studybudget.domain.accounts import PasswordRequirement, password_requirements
from studybudget.models import UserProfile
from studybudget.services.profile import ProfileStore

router = APIRouter()


@router.get("/api/profile")
async def get_profile(
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> UserProfile:
    profile = store.get()
    if profile is None:
        raise HTTPException(status_code=404, detail="No profile is signed in.")
    return profile


@router.put("/api/profile")
async def update_profile(
    req: ProfileUpdate,
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> UserProfile:
    return store.update(req.model_dump(exclude_none=True))


@router.post("/api/login")
async def login(
    req: LoginRequest,
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> UserProfile:
    return store.login(req.email, req.password)


@router.post("/api/signup", status_code=201)
async def signup(
    req: SignupRequest,
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> UserProfile:
    return store.signup(
        first_name=req.first_name,
        last_name=req.last_name,
        email=req.email,
        password=req.password,
        confirm_password=req.confirm_password,
        terms_accepted=req.terms_accepted,
    )


@router.post("/api/logout")
async def logout(
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> dict[str, str]:
    store.logout()
    return {"status": "signed out"}


@router.post("/api/profile/password")
async def change_password(
    req: PasswordChangeRequest,
    store: Annotated[ProfileStore, Depends(get_profile_store)],
) -> dict[str, str]:
    store.change_password(req.new_password, req.confirm_password)
    return {"status": "success", "message": "Password updated successfully!"}


@router.get("/api/password-requirements")
async def check_password_requirements(password: str = "") -> list[PasswordRequirement]:
    return password_requirements(password)
