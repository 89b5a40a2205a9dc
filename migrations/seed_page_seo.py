#!/usr/bin/env python3
"""Seed script to create or update SEO data for the six static pages in both locales."""

import os
import sys
from datetime import datetime, timezone

# Load environment variables
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

if not os.environ.get("DATABASE_URL"):
    print("ERROR: DATABASE_URL environment variable is required.")
    sys.exit(1)

from agency_site.shared.database import Base, SessionLocal, engine
from agency_site.shared.content.database import PageSEO

PAGE_SEO_DATA = [
    {
        "slug": "home",
        "title": {
            "id": "codebiru - Pengembangan Web & Aplikasi Premium",
            "en": "codebiru - Premium Web & App Development",
        },
        "description": {
            "id": "Transformasikan kehadiran digital Anda dengan pengembangan web mutakhir, desain UI/UX yang menakjubkan, dan solusi inovatif.",
            "en": "Transform your digital presence with cutting-edge web development, stunning UI/UX design, and innovative solutions.",
        },
        "keywords": ["web development", "app development", "UI/UX design", "digital agency", "pengembangan web"],
        "og_image": "/og-home.jpg",
    },
    {
        "slug": "about",
        "title": {"id": "Tentang Kami | codebiru", "en": "About Us | codebiru"},
        "description": {
            "id": "Kenali tim di balik codebiru dan cara kami membangun produk digital.",
            "en": "Meet the team behind codebiru and how we build digital products.",
        },
        "keywords": ["about", "team", "tentang kami", "digital agency"],
        "og_image": "/og-about.jpg",
    },
    {
        "slug": "services",
        "title": {"id": "Layanan | codebiru", "en": "Services | codebiru"},
        "description": {
            "id": "Pengembangan web, aplikasi mobile, desain UI/UX, dan konsultasi teknologi.",
            "en": "Web development, mobile apps, UI/UX design and technology consulting.",
        },
        "keywords": ["services", "layanan", "web development", "mobile apps", "UI/UX"],
        "og_image": "/og-services.jpg",
    },
    {
        "slug": "work",
        "title": {"id": "Portofolio | codebiru", "en": "Our Work | codebiru"},
        "description": {
            "id": "Proyek pilihan yang telah kami kerjakan untuk klien kami.",
            "en": "Selected projects we have delivered for our clients.",
        },
        "keywords": ["portfolio", "portofolio", "case studies", "projects"],
        "og_image": "/og-work.jpg",
    },
    {
        "slug": "blog",
        "title": {"id": "Blog | codebiru", "en": "Blog | codebiru"},
        "description": {
            "id": "Artikel tentang pengembangan web, desain, dan teknologi.",
            "en": "Articles on web development, design and technology.",
        },
        "keywords": ["blog", "artikel", "web development", "design"],
        "og_image": "/og-blog.jpg",
    },
    {
        "slug": "contact",
        "title": {"id": "Hubungi Kami | codebiru", "en": "Contact Us | codebiru"},
        "description": {
            "id": "Ceritakan proyek Anda dan kami akan menghubungi Anda segera.",
            "en": "Tell us about your project and we will get back to you soon.",
        },
        "keywords": ["contact", "kontak", "hubungi kami", "get a quote"],
        "og_image": "/og-contact.jpg",
    },
]


def run_seed():
    print("Seeding page SEO data...")
    print(f"Database: {engine.url.host}:{engine.url.port}/{engine.url.database}")

    Base.metadata.create_all(bind=engine, tables=[PageSEO.__table__], checkfirst=True)

    db = SessionLocal()
    try:
        now = datetime.now(timezone.utc)
        for data in PAGE_SEO_DATA:
            page = db.query(PageSEO).filter(PageSEO.slug == data["slug"]).first()
            if page:
                for field, value in data.items():
                    setattr(page, field, value)
                page.published = True
                page.updated_at = now
                print(f"✓ Updated '{data['slug']}'")
            else:
                db.add(PageSEO(**data, published=True, created_at=now, updated_at=now))
                print(f"✓ Created '{data['slug']}'")
        db.commit()
    finally:
        db.close()

    print(f"\n✓ Seeded {len(PAGE_SEO_DATA)} pages successfully!")


if __name__ == "__main__":
    run_seed()
