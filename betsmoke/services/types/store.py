from __future__ import annotations

from datetime import datetime
from typing import Dict, List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from betsmoke.models.models import SportsMonksType
from betsmoke.services.types.types import TypeNode


def to_node(row: SportsMonksType) -> TypeNode:
    return TypeNode(
        id=row.id,
        parent_id=row.parent_id,
        name=row.name or "",
        code=row.code or "",
        developer_name=row.developer_name or "",
        model_type=row.model_type or "",
        group=row.group,
        stat_group=row.stat_group,
        last_synced_at=row.last_synced_at,
    )


async def delete_all(session: AsyncSession) -> None:
    await session.execute(delete(SportsMonksType))


async def insert_one(session: AsyncSession, node: TypeNode, synced_at: datetime) -> None:
    session.add(
        SportsMonksType(
            id=node.id,
            parent_id=node.parent_id,
            name=node.name,
            code=node.code,
            developer_name=node.developer_name,
            model_type=node.model_type,
            group=node.group,
            stat_group=node.stat_group,
            last_synced_at=synced_at,
        )
    )


async def find_all(session: AsyncSession) -> List[TypeNode]:
    res = await session.execute(select(SportsMonksType).order_by(SportsMonksType.id))
    return [to_node(row) for row in res.scalars().all()]


async def count(session: AsyncSession) -> int:
    res = await session.execute(select(func.count()).select_from(SportsMonksType))
    return int(res.scalar_one())


async def group_by_model_type(session: AsyncSession) -> Dict[str, int]:
    n = func.count(SportsMonksType.id)
    res = await session.execute(
        select(SportsMonksType.model_type, n)
        .group_by(SportsMonksType.model_type)
        .order_by(n.desc(), SportsMonksType.model_type)
    )
    return {model_type: int(c) for model_type, c in res.all()}
