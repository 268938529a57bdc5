from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from talentmatch.database import get_db
from talentmatch.services.repository import RecordStore


async def get_record_store(db: AsyncSession = Depends(get_db)) -> RecordStore:
    return RecordStore(db)
