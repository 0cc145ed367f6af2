"""Blog API routers: admin CRUD, header image upload, public reads."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.session import get_db
from src.models.blog_post import BlogPost
from src.modules.auth.auth import AuthenticatedUser
from src.modules.auth.dependencies import require_admin
from src.modules.blog.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.modules.blog.images import upload_header_image
from src.modules.blog.schemas import (
    BlogImageResponse,
    BlogPostCreate,
    BlogPostListResponse,
    BlogPostResponse,
    BlogPostUpdate,
)
from src.modules.blog.service import BlogService
from src.modules.storage.base import PhotoStore
from src.modules.storage.factory import get_blog_image_store

admin_router = APIRouter(prefix="/admin/blog", tags=["admin-blog"])
public_router = APIRouter(prefix="/blog", tags=["blog"])


def _to_response(post: BlogPost, store: PhotoStore, request: Request) -> BlogPostResponse:
    response = BlogPostResponse.model_validate(post)
    if post.header_photo and not post.header_photo.startswith(("http://", "https://")):
        response.header_photo_url = store.public_url(post.header_photo, request.url.hostname)
    else:
        response.header_photo_url = post.header_photo
    return response


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@admin_router.get("", response_model=BlogPostListResponse)
async def list_posts_admin(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_blog_image_store),
):
    """All posts including drafts."""
    posts, total = await BlogService(db).list_posts(published_only=False, page=page, limit=limit)
    return BlogPostListResponse(
        posts=[_to_response(p, store, request) for p in posts], total=total, page=page, limit=limit
    )


@admin_router.post("", response_model=BlogPostResponse, status_code=201)
async def create_post(
    body: BlogPostCreate,
    request: Request,
    user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_blog_image_store),
):
    post = await BlogService(db).create(body, author_id=user.id)
    return _to_response(post, store, request)


@admin_router.post("/images", response_model=BlogImageResponse, status_code=201)
async def upload_blog_image(
    request: Request,
    file: UploadFile = File(...),
    alt_text: str = Form(""),
    _user: AuthenticatedUser = Depends(require_admin),
    store: PhotoStore = Depends(get_blog_image_store),
):
    """Compress and store a header image; returns its storage path and public URL."""
    data = await file.read()
    result = await upload_header_image(
        store, data, file.filename or "image", alt_text, request.url.hostname
    )
    return BlogImageResponse(**result)


@admin_router.get("/{post_id}", response_model=BlogPostResponse)
async def get_post_admin(
    post_id: uuid.UUID,
    request: Request,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_blog_image_store),
):
    post = await BlogService(db).get_admin(post_id)
    return _to_response(post, store, request)


@admin_router.put("/{post_id}", response_model=BlogPostResponse)
async def update_post(
    post_id: uuid.UUID,
    body: BlogPostUpdate,
    request: Request,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_blog_image_store),
):
    post = await BlogService(db).update(post_id, body)
    return _to_response(post, store, request)


@admin_router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: uuid.UUID,
    _user: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await BlogService(db).delete(post_id)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------


@public_router.get("", response_model=BlogPostListResponse)
async def list_posts(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_blog_image_store),
):
    posts, total = await BlogService(db).list_posts(published_only=True, page=page, limit=limit)
    return BlogPostListResponse(
        posts=[_to_response(p, store, request) for p in posts], total=total, page=page, limit=limit
    )


@public_router.get("/{slug}", response_model=BlogPostResponse)
async def get_post(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    store: PhotoStore = Depends(get_blog_image_store),
):
    post = await BlogService(db).get_published(slug)
    return _to_response(post, store, request)
