import re

from pydantic import BaseModel

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'
MIN_PASSWORD_LENGTH = 8
MIN_NEW_PASSWORD_LENGTH = 6


class PasswordRequirement(BaseModel):
    label: str
    met: bool


def password_requirements(password: str) -> list[PasswordRequirement]:
    return [
        PasswordRequirement(label="At least 8 characters", met=len(password) >= MIN_PASSWORD_LENGTH),
        PasswordRequirement(label="At least one uppercase letter", met=bool(re.search(r"[A-Z]", password))),
        PasswordRequirement(label="At least one lowercase letter", met=bool(re.search(r"[a-z]", password))),
        PasswordRequirement(label="At least one number", met=bool(re.search(r"[0-9]", password))),
        PasswordRequirement(
            label="At least one special character",
            met=any(char in SPECIAL_CHARACTERS for char in password),
        ),
    ]


def validate_password(password: str) -> str | None:
    if all(requirement.met for requirement in password_requirements(password)):
        return None
    return "Password does not meet all requirements."


def name_from_email(email: str) -> str:
    local_part = email.split("@", 1)[0]
    return local_part[:1].upper() + local_part[1:]
