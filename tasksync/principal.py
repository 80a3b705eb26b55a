from dataclasses import dataclass
from typing import Optional

from .errors import AuthError


@dataclass(frozen=True)
class Principal:
    """The caller as seen by the query service.

    Built per request by ``routers.auth.get_principal``; tests build it directly.
    """

    user_id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "Principal":
        return cls(None)

    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def id(self) -> str:
        if self.user_id is None:
            raise AuthError()
        return self.user_id
