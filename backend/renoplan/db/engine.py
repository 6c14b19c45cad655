from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from renoplan.config import settings

engine = create_async_engine(settings.database_url, echo=(settings.app_env == "development"))
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
