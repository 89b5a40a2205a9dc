"""Locale-prefixed page routes: every content path starts with /id or /en."""

import os
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from agency_site.shared.content.database import (
    PAGE_SLUGS,
    BlogPost,
    Project,
    get_all_blog_posts,
    get_all_projects,
    get_featured_projects,
    get_page_seo,
    get_recent_blog_posts,
    get_related_blog_posts,
    get_related_projects,
)
from agency_site.shared.content.routes import load_blog_post, load_project
from agency_site.shared.database import get_db
from agency_site.shared.i18n.locale import Locale, SUPPORTED_LOCALES, get_default_locale, pick, resolve_locale

router = APIRouter(tags=["pages"])

# BCP 47 tags used for alternate links
LANGUAGE_TAGS = {"id": "id-ID", "en": "en-US"}


def site_url() -> str:
    return os.environ.get("SITE_URL", "https://codebiru.com").rstrip("/")


def _pick_optional(text, locale: Locale) -> Optional[str]:
    return pick(text, locale) if text else None


def localize_project(project: Project, locale: Locale) -> dict:
    return {
        "id": project.id,
        "title": pick(project.title, locale),
        "category": pick(project.category, locale),
        "description": pick(project.description, locale),
        "content": _pick_optional(project.content, locale),
        "tags": project.tags or [],
        "gradient": project.gradient,
        "thumbnail": project.thumbnail,
        "images": project.images or [],
        "github": project.github,
        "demo": project.demo,
        "date": project.date.isoformat(),
    }


def localize_blog_post(post: BlogPost, locale: Locale) -> dict:
    author = post.author or {}
    return {
        "slug": post.slug,
        "title": pick(post.title, locale),
        "excerpt": pick(post.excerpt, locale),
        "content": pick(post.content, locale),
        "category": pick(post.category, locale),
        "tags": post.tags or [],
        "gradient": post.gradient,
        "thumbnail": post.thumbnail,
        "author": {
            "name": author.get("name"),
            "avatar": author.get("avatar"),
            "bio": _pick_optional(author.get("bio"), locale),
        },
        "read_time": post.read_time,
        "views": post.views,
        "date": post.date.isoformat(),
    }


def page_context(db: Session, locale: Locale, page: str, path: str) -> dict:
    """Locale-resolved SEO plus canonical and alternate URLs for one page."""
    base = site_url()
    seo = get_page_seo(db, page)
    return {
        "locale": locale.value,
        "page": page,
        "path": f"/{locale.value}{path}",
        "seo": {
            "title": pick(seo.title, locale),
            "description": pick(seo.description, locale),
            "keywords": seo.keywords or [],
            "og_image": seo.og_image,
        } if seo else None,
        "canonical": f"{base}/{locale.value}{path}",
        "alternates": {LANGUAGE_TAGS[code]: f"{base}/{code}{path}" for code in SUPPORTED_LOCALES},
    }


@router.get("/", include_in_schema=False)
async def root_redirect():
    """Send the unprefixed root to the configured default locale."""
    return RedirectResponse(url=f"/{get_default_locale().value}", status_code=status.HTTP_307_TEMPORARY_REDIRECT)


@router.get("/{locale}")
async def home_page(locale: str, db: Session = Depends(get_db)):
    resolved = resolve_locale(locale)
    context = page_context(db, resolved, "home", "")
    context["featured_projects"] = [localize_project(p, resolved) for p in get_featured_projects(db)]
    context["recent_posts"] = [localize_blog_post(p, resolved) for p in get_recent_blog_posts(db, limit=3)]
    return context


@router.get("/{locale}/work/{project_id}")
async def project_page(locale: str, project_id: str, db: Session = Depends(get_db)):
    resolved = resolve_locale(locale)
    project = load_project(db, project_id)
    context = page_context(db, resolved, "work", f"/work/{project.id}")
    context["project"] = localize_project(project, resolved)
    context["related"] = [localize_project(p, resolved) for p in get_related_projects(db, project, resolved.value)]
    return context


@router.get("/{locale}/blog/{slug}")
async def blog_post_page(locale: str, slug: str, db: Session = Depends(get_db)):
    resolved = resolve_locale(locale)
    post = load_blog_post(db, slug)
    context = page_context(db, resolved, "blog", f"/blog/{post.slug}")
    context["post"] = localize_blog_post(post, resolved)
    context["related"] = [localize_blog_post(p, resolved) for p in get_related_blog_posts(db, post, resolved.value)]
    return context


@router.get("/{locale}/{page}")
async def static_page(locale: str, page: str, db: Session = Depends(get_db)):
    resolved = resolve_locale(locale)
    if page == "home" or page not in PAGE_SLUGS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"success": False, "error": "Page not found"})
    context = page_context(db, resolved, page, f"/{page}")
    if page == "work":
        context["projects"] = [localize_project(p, resolved) for p in get_all_projects(db)]
    elif page == "blog":
        context["posts"] = [localize_blog_post(p, resolved) for p in get_all_blog_posts(db)]
    return context
