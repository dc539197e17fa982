"""Session identity: get_session() -> {"uid": str} | None."""

from typing import Awaitable, Callable, Mapping, Optional

Session = Mapping[str, str]
SessionProvider = Callable[[], Awaitable[Optional[Session]]]


def static_session(user_id: Optional[str]) -> SessionProvider:
    """Session provider bound to a fixed uid (None means signed out)."""

    async def get_session() -> Optional[Session]:
        if not user_id:
            return None
        return {"uid": user_id}

    return get_session


async def session_uid(get_session: SessionProvider) -> Optional[str]:
    session = await get_session()
    if not session:
        return None
    return session.get("uid") or None
