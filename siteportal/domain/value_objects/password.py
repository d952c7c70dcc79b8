"""Hashed password value object."""

import re
from dataclasses import dataclass
from typing import ClassVar, Pattern


@dataclass(frozen=True)
class HashedPassword:
    """A bcrypt credential hash as stored for a user.

    Plaintext never reaches this type; only the output of the hashing
    primitive does. Construction validates the modular-crypt format so a
    plaintext value cannot be stored as a hash by mistake.

    Attributes:
        value: The bcrypt hash string (immutable)
    """

    value: str

    BCRYPT_FORMAT: ClassVar[Pattern[str]] = re.compile(r"^\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}$")

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Hashed password cannot be empty")
        if not self.BCRYPT_FORMAT.match(self.value):
            raise ValueError("Invalid hashed password format")

    @property
    def rounds(self) -> int:
        """The bcrypt work factor encoded in the hash."""
        return int(self.value.split("$")[2])

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"HashedPassword(rounds={self.rounds})"
