"""Blog post service: admin CRUD and published-only public reads."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.exceptions import ConflictException, NotFoundException
from src.models.blog_post import BlogPost
from src.modules.blog.schemas import BlogPostCreate, BlogPostUpdate

logger = logging.getLogger(__name__)


class BlogService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_slug_free(self, slug: str, exclude_id: uuid.UUID | None = None) -> None:
        stmt = select(BlogPost.id).where(BlogPost.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(BlogPost.id != exclude_id)
        result = await self.db.execute(stmt)
        if result.scalar_one_or_none() is not None:
            raise ConflictException("A blog post with this slug already exists")

    async def create(self, data: BlogPostCreate, author_id: uuid.UUID) -> BlogPost:
        await self._ensure_slug_free(data.slug)
        post = BlogPost(
            **data.model_dump(),
            published_at=datetime.now(UTC) if data.published else None,
            author_id=author_id,
        )
        self.db.add(post)
        await self.db.flush()
        await self.db.refresh(post)
        logger.info("Created blog post %s (%s) published=%s", post.id, post.slug, post.published)
        return post

    async def get_admin(self, post_id: uuid.UUID) -> BlogPost:
        result = await self.db.execute(select(BlogPost).where(BlogPost.id == post_id))
        post = result.scalar_one_or_none()
        if post is None:
            raise NotFoundException(f"Blog post {post_id} not found")
        return post

    async def update(self, post_id: uuid.UUID, data: BlogPostUpdate) -> BlogPost:
        """Partial update. ``published_at`` is stamped only when a draft goes live."""
        post = await self.get_admin(post_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("slug") and changes["slug"] != post.slug:
            await self._ensure_slug_free(changes["slug"], exclude_id=post_id)

        if changes.get("published") and not post.published:
            post.published_at = datetime.now(UTC)

        for key, value in changes.items():
            if key in ("title", "slug", "published") and value is None:
                continue
            setattr(post, key, value)

        await self.db.flush()
        await self.db.refresh(post)
        return post

    async def delete(self, post_id: uuid.UUID) -> None:
        post = await self.get_admin(post_id)
        await self.db.delete(post)
        await self.db.flush()
        logger.info("Deleted blog post %s", post_id)

    async def get_published(self, slug: str) -> BlogPost:
        result = await self.db.execute(
            select(BlogPost).where(BlogPost.slug == slug, BlogPost.published.is_(True))
        )
        post = result.scalar_one_or_none()
        if post is None:
            raise NotFoundException(f"Blog post '{slug}' not found")
        return post

    async def list_posts(
        self, published_only: bool = True, page: int = 1, limit: int = 10
    ) -> tuple[list[BlogPost], int]:
        conditions = [BlogPost.published.is_(True)] if published_only else []

        count_result = await self.db.execute(
            select(func.count()).select_from(BlogPost).where(*conditions)
        )
        total = count_result.scalar_one()

        result = await self.db.execute(
            select(BlogPost)
            .where(*conditions)
            .order_by(BlogPost.published_at.desc().nulls_last(), BlogPost.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(result.scalars().all()), total
