"""Pydantic schemas for projects, blog posts and page SEO."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from agency_site.shared.i18n.locale import BilingualText


class ProjectResponse(BaseModel):
    """Schema for a published project."""
    id: str
    title: BilingualText
    category: BilingualText
    description: BilingualText
    content: Optional[BilingualText] = None
    tags: List[str] = []
    gradient: Optional[str] = None
    thumbnail: Optional[str] = None
    images: Optional[List[str]] = None
    github: Optional[str] = None
    demo: Optional[str] = None
    featured: bool = False
    date: datetime

    class Config:
        from_attributes = True


class BlogAuthor(BaseModel):
    name: str
    avatar: Optional[str] = None
    bio: Optional[BilingualText] = None


class BlogSEO(BaseModel):
    metaTitle: Optional[BilingualText] = None
    metaDescription: Optional[BilingualText] = None
    ogImage: Optional[str] = None


class BlogPostResponse(BaseModel):
    """Schema for a published blog post."""
    slug: str
    title: BilingualText
    excerpt: BilingualText
    content: BilingualText
    category: BilingualText
    tags: List[str] = []
    gradient: Optional[str] = None
    thumbnail: Optional[str] = None
    author: BlogAuthor
    read_time: int
    featured: bool = False
    date: datetime
    views: int = 0
    seo: Optional[BlogSEO] = None

    class Config:
        from_attributes = True


class PageSEOResponse(BaseModel):
    """Schema for page SEO data."""
    slug: str
    title: BilingualText
    description: BilingualText
    keywords: List[str] = []
    og_image: Optional[str] = None

    class Config:
        from_attributes = True


class LocalizedPageSEO(BaseModel):
    """Page SEO resolved to one locale."""
    slug: str
    locale: str
    title: str
    description: str
    keywords: List[str] = []
    og_image: Optional[str] = None


class ProjectListResponse(BaseModel):
    success: bool = True
    data: List[ProjectResponse]
    count: int


class ProjectDetailResponse(BaseModel):
    success: bool = True
    data: ProjectResponse


class BlogPostListResponse(BaseModel):
    success: bool = True
    data: List[BlogPostResponse]
    count: int


class BlogPostDetailResponse(BaseModel):
    success: bool = True
    data: BlogPostResponse
