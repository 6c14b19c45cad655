from collections.abc import AsyncGenerator, Awaitable, Callable

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession

from renoplan.config import settings
from renoplan.db.engine import async_session_factory

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        yield session


def create_openai_client() -> AsyncOpenAI:
    kwargs: dict = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


def get_ai_client(request: Request) -> AsyncOpenAI:
    """The client built once at startup and kept on app state."""
    client = getattr(request.app.state, "ai_client", None)
    if client is None:
        client = create_openai_client()
        request.app.state.ai_client = client
    return client


def _decode_subject(token: str) -> str | None:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return payload.get("sub")


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    if credentials is None:
        return None
    return _decode_subject(credentials.credentials)


async def get_current_user(user_id: str | None = Depends(get_optional_user)) -> str:
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def rate_limit(policy_name: str) -> Callable[..., Awaitable[None]]:
    """Dependency enforcing the named policy, keyed by user id or client IP."""

    async def _enforce(
        request: Request,
        response: Response,
        user_id: str | None = Depends(get_optional_user),
    ) -> None:
        policy = request.app.state.rate_limit_policies[policy_name]
        if user_id:
            key = f"user_{user_id}"
        else:
            key = f"ip_{request.client.host if request.client else 'unknown'}"
        result = request.app.state.rate_limiter.hit(policy, key)
        response.headers["RateLimit-Limit"] = str(result.limit)
        response.headers["RateLimit-Remaining"] = str(result.remaining)
        response.headers["RateLimit-Reset"] = str(result.reset_after)

    return _enforce
