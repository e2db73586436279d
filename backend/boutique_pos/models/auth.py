from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Signed-in user as stored in local storage (never carries a password)."""
    id: str
    name: str
    email: str
    role: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}

    @classmethod
    def from_dict(cls, data: dict) -> "Identity":
        return cls(id=str(data["id"]), name=data["name"], email=data["email"], role=data["role"])
