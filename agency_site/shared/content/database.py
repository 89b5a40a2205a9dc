"""Database models and read queries for projects, blog posts and page SEO."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Column, String, Boolean, DateTime, Integer, Index
from sqlalchemy.orm import Session

from agency_site.shared.database import Base, JSONDocument
from agency_site.shared.i18n.locale import pick, related_by_category

PAGE_SLUGS = ("home", "about", "services", "work", "blog", "contact")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Portfolio project. Bilingual fields are stored as {"id": ..., "en": ...}."""
    __tablename__ = "projects"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(100), unique=True, nullable=False, index=True)  # URL key, e.g. 'ecommerce-platform'
    title = Column(JSONDocument, nullable=False)
    category = Column(JSONDocument, nullable=False)
    description = Column(JSONDocument, nullable=False)
    content = Column(JSONDocument, nullable=True)
    tags = Column(JSONDocument, nullable=False, default=list)
    gradient = Column(String, nullable=True)
    thumbnail = Column(String, nullable=True)
    images = Column(JSONDocument, nullable=True)
    github = Column(String, nullable=True)
    demo = Column(String, nullable=True)
    featured = Column(Boolean, default=False, nullable=False)
    published = Column(Boolean, default=False, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_projects_published_date', 'published', 'date'),
    )


class BlogPost(Base):
    """Blog post keyed by slug."""
    __tablename__ = "blog_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(200), unique=True, nullable=False, index=True)
    title = Column(JSONDocument, nullable=False)
    excerpt = Column(JSONDocument, nullable=False)
    content = Column(JSONDocument, nullable=False)
    category = Column(JSONDocument, nullable=False)
    tags = Column(JSONDocument, nullable=False, default=list)
    gradient = Column(String, nullable=True)
    thumbnail = Column(String, nullable=True)
    author = Column(JSONDocument, nullable=False)  # {name, avatar?, bio?: {id, en}}
    read_time = Column(Integer, default=5, nullable=False)  # minutes
    published = Column(Boolean, default=False, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    views = Column(Integer, default=0, nullable=False)
    seo = Column(JSONDocument, nullable=True)  # {metaTitle?, metaDescription?, ogImage?}
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_blog_posts_published_date', 'published', 'date'),
    )


class PageSEO(Base):
    """SEO title/description/keywords for one static page."""
    __tablename__ = "page_seo"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(20), unique=True, nullable=False, index=True)  # home, about, services, work, blog, contact
    title = Column(JSONDocument, nullable=False)
    description = Column(JSONDocument, nullable=False)
    keywords = Column(JSONDocument, nullable=False, default=list)
    og_image = Column(String, nullable=True)
    published = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


# Projects

def _published_projects(db: Session):
    return db.query(Project).filter(Project.published.is_(True)).order_by(Project.date.desc(), Project.pk)


def get_all_projects(db: Session) -> List[Project]:
    return _published_projects(db).all()


def get_featured_projects(db: Session, limit: int = 4) -> List[Project]:
    return _published_projects(db).filter(Project.featured.is_(True)).limit(limit).all()


def get_project_by_id(db: Session, project_id: str) -> Optional[Project]:
    """project_id must already have passed validate_id."""
    return db.query(Project).filter(Project.id == project_id, Project.published.is_(True)).first()


def get_projects_by_category(db: Session, category: str, locale: str = "id") -> List[Project]:
    return [project for project in get_all_projects(db) if pick(project.category, locale) == category]


def get_related_projects(db: Session, project: Project, locale: str = "id", limit: int = 3) -> List[Project]:
    """Same-category projects in the given locale, excluding the project itself."""
    return related_by_category(get_all_projects(db), project.id, project.category, locale, limit)


# Blog posts

def _published_posts(db: Session):
    return db.query(BlogPost).filter(BlogPost.published.is_(True)).order_by(BlogPost.date.desc(), BlogPost.id)


def get_all_blog_posts(db: Session) -> List[BlogPost]:
    return _published_posts(db).all()


def get_featured_blog_posts(db: Session, limit: int = 3) -> List[BlogPost]:
    return _published_posts(db).filter(BlogPost.featured.is_(True)).limit(limit).all()


def get_recent_blog_posts(db: Session, limit: int = 5) -> List[BlogPost]:
    return _published_posts(db).limit(limit).all()


def get_blog_post_by_slug(db: Session, slug: str, count_view: bool = True) -> Optional[BlogPost]:
    """Fetch a published post; each successful read increments its view count."""
    post = db.query(BlogPost).filter(BlogPost.slug == slug, BlogPost.published.is_(True)).first()
    if post and count_view:
        # Atomic increment in SQL
        db.query(BlogPost).filter(BlogPost.id == post.id).update(
            {BlogPost.views: BlogPost.views + 1}, synchronize_session=False
        )
        db.commit()
        db.refresh(post)
    return post


def get_blog_posts_by_category(db: Session, category: str, locale: str = "id") -> List[BlogPost]:
    return [post for post in get_all_blog_posts(db) if pick(post.category, locale) == category]


def get_related_blog_posts(db: Session, post: BlogPost, locale: str = "id", limit: int = 3) -> List[BlogPost]:
    return related_by_category(
        get_all_blog_posts(db), post.slug, post.category, locale, limit,
        key=lambda record: record.slug,
    )


# Page SEO

def get_page_seo(db: Session, slug: str) -> Optional[PageSEO]:
    return db.query(PageSEO).filter(PageSEO.slug == slug, PageSEO.published.is_(True)).first()


def get_all_pages_seo(db: Session) -> List[PageSEO]:
    return db.query(PageSEO).filter(PageSEO.published.is_(True)).order_by(PageSEO.id).all()
