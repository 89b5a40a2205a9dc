"""Read-only JSON endpoints for projects, blog posts and page SEO."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from agency_site.shared.content.database import (
    PAGE_SLUGS,
    get_all_blog_posts,
    get_all_pages_seo,
    get_all_projects,
    get_blog_post_by_slug,
    get_blog_posts_by_category,
    get_featured_blog_posts,
    get_featured_projects,
    get_page_seo,
    get_project_by_id,
    get_projects_by_category,
    get_related_blog_posts,
    get_related_projects,
)
from agency_site.shared.content.schemas import (
    BlogPostDetailResponse,
    BlogPostListResponse,
    BlogPostResponse,
    LocalizedPageSEO,
    PageSEOResponse,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectResponse,
)
from agency_site.shared.database import get_db
from agency_site.shared.errors import InvalidInput
from agency_site.shared.i18n.locale import get_default_locale, pick, resolve_locale
from agency_site.shared.security.input_validation import validate_id, validate_number, validate_slug

router = APIRouter(prefix="/api", tags=["content"])

MAX_LIST_LIMIT = 50
MAX_RELATED_LIMIT = 12


def _not_found(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"success": False, "error": message})


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"success": False, "error": message})


def load_project(db: Session, raw_id: str):
    """Validate a project id and fetch the published project, or raise 400/404."""
    try:
        project_id = validate_id(raw_id)
    except InvalidInput:
        raise _bad_request("Invalid project ID")
    project = get_project_by_id(db, project_id)
    if not project:
        raise _not_found("Project not found")
    return project


def load_blog_post(db: Session, raw_slug: str, count_view: bool = True):
    """Validate a slug and fetch the published post, or raise 400/404."""
    try:
        slug = validate_slug(raw_slug)
    except InvalidInput:
        raise _bad_request("Invalid blog post slug")
    post = get_blog_post_by_slug(db, slug, count_view=count_view)
    if not post:
        raise _not_found("Blog post not found")
    return post


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(
    featured: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    locale: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    All published projects, or featured ones when ?featured=true.
    ?category= filters by category name in ?locale= (default locale when omitted).
    """
    if category is not None:
        resolved = resolve_locale(locale) if locale is not None else get_default_locale()
        projects = get_projects_by_category(db, category, resolved.value)
    elif featured == "true":
        projects = get_featured_projects(db, validate_number(limit, 1, MAX_LIST_LIMIT, default=4))
    else:
        projects = get_all_projects(db)
    data = [ProjectResponse.model_validate(project) for project in projects]
    return ProjectListResponse(data=data, count=len(data))


@router.get("/projects/{project_id}", response_model=ProjectDetailResponse)
async def get_project(project_id: str, db: Session = Depends(get_db)):
    project = load_project(db, project_id)
    return ProjectDetailResponse(data=ProjectResponse.model_validate(project))


@router.get("/projects/{project_id}/related", response_model=ProjectListResponse)
async def list_related_projects(
    project_id: str,
    locale: str = Query(...),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Projects in the same category (matched in the requested locale)."""
    resolved = resolve_locale(locale)
    project = load_project(db, project_id)
    related = get_related_projects(db, project, resolved.value, validate_number(limit, 1, MAX_RELATED_LIMIT, default=3))
    data = [ProjectResponse.model_validate(item) for item in related]
    return ProjectListResponse(data=data, count=len(data))


@router.get("/blog", response_model=BlogPostListResponse)
async def list_blog_posts(
    featured: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    locale: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    if category is not None:
        resolved = resolve_locale(locale) if locale is not None else get_default_locale()
        posts = get_blog_posts_by_category(db, category, resolved.value)
    elif featured == "true":
        posts = get_featured_blog_posts(db, validate_number(limit, 1, MAX_LIST_LIMIT, default=3))
    else:
        posts = get_all_blog_posts(db)
    data = [BlogPostResponse.model_validate(post) for post in posts]
    return BlogPostListResponse(data=data, count=len(data))


@router.get("/blog/{slug}", response_model=BlogPostDetailResponse)
async def get_blog_post(slug: str, db: Session = Depends(get_db)):
    post = load_blog_post(db, slug)
    return BlogPostDetailResponse(data=BlogPostResponse.model_validate(post))


@router.get("/blog/{slug}/related", response_model=BlogPostListResponse)
async def list_related_blog_posts(
    slug: str,
    locale: str = Query(...),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    resolved = resolve_locale(locale)
    post = load_blog_post(db, slug, count_view=False)
    related = get_related_blog_posts(db, post, resolved.value, validate_number(limit, 1, MAX_RELATED_LIMIT, default=3))
    data = [BlogPostResponse.model_validate(item) for item in related]
    return BlogPostListResponse(data=data, count=len(data))


@router.get("/pages/seo")
async def list_pages_seo(db: Session = Depends(get_db)):
    data = [PageSEOResponse.model_validate(page).model_dump() for page in get_all_pages_seo(db)]
    return {"success": True, "data": data, "count": len(data)}


@router.get("/pages/{slug}/seo")
async def get_page_seo_data(slug: str, locale: Optional[str] = Query(None), db: Session = Depends(get_db)):
    """SEO data for a static page; resolved to one locale when ?locale= is given."""
    page_slug = validate_slug(slug)
    page = get_page_seo(db, page_slug) if page_slug in PAGE_SLUGS else None
    if not page:
        raise _not_found("Page not found")

    if locale is None:
        return {"success": True, "data": PageSEOResponse.model_validate(page).model_dump()}

    resolved = resolve_locale(locale)
    localized = LocalizedPageSEO(
        slug=page.slug,
        locale=resolved.value,
        title=pick(page.title, resolved),
        description=pick(page.description, resolved),
        keywords=page.keywords or [],
        og_image=page.og_image,
    )
    return {"success": True, "data": localized.model_dump()}
