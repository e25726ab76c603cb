"""SQLAlchemy implementation for banner metadata repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from banner_server.db.models import Banner as BannerModel
from banner_server.modules.banners.models import Banner, BannerDraft, BannerUpdate


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on the way back; stored values are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlBannerRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(self, draft: BannerDraft) -> Banner:
        model = BannerModel(
            title=draft.title,
            alt_text=draft.alt_text,
            start_date=draft.start_date,
            end_date=draft.end_date,
            remote_url=draft.remote_url,
            file_name=draft.file_name,
            content_type=draft.content_type,
            size_bytes=draft.size_bytes,
            created_at=draft.created_at,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def find_all(self) -> Sequence[Banner]:
        stmt = select(BannerModel).order_by(BannerModel.created_at.desc(), BannerModel.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get_by_id(self, banner_id: str) -> Banner | None:
        stmt = select(BannerModel).where(BannerModel.id == banner_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def delete_by_id(self, banner_id: str) -> bool:
        stmt = delete(BannerModel).where(BannerModel.id == banner_id)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def update_by_id(self, banner_id: str, update_fields: BannerUpdate) -> Banner | None:
        values = update_fields.provided()
        if not values:
            return await self.get_by_id(banner_id)
        stmt = (
            update(BannerModel)
            .where(BannerModel.id == banner_id)
            .values(**values)
            .execution_options(synchronize_session="fetch")
            .returning(BannerModel)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model else None

    @staticmethod
    def _to_domain(model: BannerModel) -> Banner:
        return Banner(
            id=str(model.id),
            title=model.title,
            alt_text=model.alt_text,
            start_date=model.start_date,
            end_date=model.end_date,
            remote_url=model.remote_url,
            file_name=model.file_name,
            content_type=model.content_type,
            size_bytes=model.size_bytes,
            created_at=_as_utc(model.created_at),
        )
