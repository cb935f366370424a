"""The form that edits a single user."""

from __future__ import annotations

from taskboard.models import Mode, User, ValidationError

_INVALID_EMAIL = "Invalid Email Format"


def validate_email(email: str) -> str:
    """Check the e-mail has one '@' with text around it and a dot after it."""
    at = email.find("@")
    if at <= 0 or at != email.rfind("@") or at >= len(email) - 1:
        raise ValidationError(_INVALID_EMAIL)
    dot = email.find(".", at + 2)
    if dot == -1 or dot >= len(email) - 1:
        raise ValidationError(_INVALID_EMAIL)
    return email


class UserForm:
    """Edits ``user`` in place when accepted."""

    def __init__(self, user: User, mode: Mode) -> None:
        self.user = user
        self.mode = mode

    def initial_values(self) -> dict[str, str]:
        """The values the fields start with; preview mode leaves them blank."""
        if self.mode is Mode.PREVIEW:
            return {"name": "", "email": "", "job_title": ""}
        return {
            "name": self.user.name,
            "email": self.user.email,
            "job_title": self.user.job_title,
        }

    def read_only(self) -> bool:
        """Whether the fields may not be edited."""
        return self.mode is Mode.DELETE

    def validate(self, name: str, email: str, job_title: str) -> None:
        """Raise ValidationError if the values are malformed or unchanged."""
        validate_email(email)
        if (name, email, job_title) == (
            self.user.name,
            self.user.email,
            self.user.job_title,
        ):
            raise ValidationError("No changes were made")

    def accept(self, name: str, email: str, job_title: str) -> User:
        """Validate the values, store them on the user and return it."""
        if self.mode is Mode.PREVIEW:
            return self.user
        self.validate(name, email, job_title)
        User(name=name, email=email, job_title=job_title)
        self.user.name = name
        self.user.email = email
        self.user.job_title = job_title
        return self.user