"""Signed bearer tokens bound to a user id."""

from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from itsdangerous import BadSignature, SignatureExpired, TimestampSigner

from slidecast.domain.errors import UnauthorizedError


class TokenIssuer(Protocol):
    """Interface for minting and verifying bearer credentials."""

    def issue_token(self, user_id: UUID) -> str:
        """Return a credential that encodes the user id."""

    def verify_token(self, token: str) -> UUID:
        """Return the user id bound to a credential or raise UnauthorizedError."""


@dataclass
class SignedTokenIssuer(TokenIssuer):
    """Self-contained tokens signed with a server secret.

    Tokens carry the user id and a timestamp, so verification needs no store
    lookup. There is no revocation: a token stays valid until it ages past
    ``max_age_seconds``.
    """

    secret: str
    max_age_seconds: int
    salt: str = "slidecast-auth"
    _signer: TimestampSigner = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._signer = TimestampSigner(self.secret, salt=self.salt)

    def issue_token(self, user_id: UUID) -> str:
        return self._signer.sign(str(user_id)).decode("utf-8")

    def verify_token(self, token: str) -> UUID:
        try:
            raw = self._signer.unsign(token, max_age=self.max_age_seconds)
        except SignatureExpired as exc:
            raise UnauthorizedError("Token expired") from exc
        except BadSignature as exc:
            raise UnauthorizedError("Invalid token") from exc
        try:
            return UUID(raw.decode("utf-8"))
        except ValueError as exc:
            raise UnauthorizedError("Invalid token") from exc
