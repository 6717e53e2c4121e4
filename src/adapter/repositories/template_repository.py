"""SQLAlchemy Template Repository Implementation

Implements template persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.template_repository import TemplateRepository
from src.domain.template import Template
from src.domain.template_record import TemplateRecord


class SqlAlchemyTemplateRepository(TemplateRepository):
    """
    SQLAlchemy implementation of TemplateRepository

    Uses async session for database operations. Writes are flushed, not
    committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_record(self, template_id: str) -> Optional[TemplateRecord]:
        statement = select(TemplateRecord).where(TemplateRecord.id == template_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get(self, template_id: str) -> Optional[Template]:
        record = await self._get_record(template_id)
        if record is None:
            return None
        return record.to_template()

    async def put(self, template: Template, shop_id: Optional[str] = None) -> Template:
        incoming = TemplateRecord.from_template(template, shop_id=shop_id)
        record = await self._get_record(incoming.id)

        if record is None:
            record = incoming
        else:
            record.name = incoming.name
            record.shop_id = shop_id
            record.definition = incoming.definition
            record.updated_at = datetime.utcnow()

        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record.to_template()

    async def delete(self, template_id: str) -> bool:
        record = await self._get_record(template_id)
        if record is None:
            return False
        await self.session.delete(record)
        await self.session.flush()
        return True
