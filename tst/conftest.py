"""
Pytest configuration and fixtures
"""
import os
import tempfile
from datetime import datetime, timezone

# Configure the environment before any application module is imported
_test_dir = tempfile.mkdtemp(prefix="agency_site_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_dir, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-contact-challenges"
os.environ["ADMIN_SECRET"] = "test-admin-secret"
os.environ["APP_ENV"] = "test"
os.environ["TRUST_PROXY_HEADERS"] = "true"
for _var in ("SMTP_USER", "SMTP_PASSWORD", "CONTACT_NOTIFY_EMAIL", "DEFAULT_LOCALE"):
    os.environ.pop(_var, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from agency_site.shared.database import Base, SessionLocal, engine, get_db
from agency_site.shared.content.database import BlogPost, PageSEO, Project
import agency_site.shared.contact.database  # noqa: F401


@pytest.fixture(scope="function")
def db() -> Session:
    """Create a database session on a clean schema"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """The contact rate limiter is process-wide; start every test empty."""
    from agency_site.shared.contact.routes import contact_rate_limiter
    contact_rate_limiter.reset()
    yield
    contact_rate_limiter.reset()


@pytest.fixture(scope="function")
def client(db: Session):
    """Create test client with database dependency override"""
    from agency_site.app import app

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _date(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


def _bilingual(id_text, en_text):
    return {"id": id_text, "en": en_text}


WEB = _bilingual("Pengembangan Web", "Web Development")
MOBILE = _bilingual("Aplikasi Mobile", "Mobile App")


@pytest.fixture
def content(db: Session):
    """Projects, blog posts and page SEO in both locales."""
    projects = [
        Project(id="shop-platform", title=_bilingual("Platform Toko", "Shop Platform"), category=WEB,
                description=_bilingual("Toko daring", "Online shop"), tags=["nextjs"], featured=True,
                published=True, date=_date(2024, 3, 1)),
        Project(id="clinic-portal", title=_bilingual("Portal Klinik", "Clinic Portal"), category=WEB,
                description=_bilingual("Portal pasien", "Patient portal"), tags=["react"], featured=False,
                published=True, date=_date(2024, 5, 1)),
        Project(id="fitness-app", title=_bilingual("Aplikasi Kebugaran", "Fitness App"), category=MOBILE,
                description=_bilingual("Pelacak latihan", "Workout tracker"), tags=["flutter"], featured=True,
                published=True, date=_date(2024, 1, 1)),
        Project(id="school-site", title=_bilingual("Situs Sekolah", "School Site"), category=WEB,
                description=_bilingual("Situs sekolah", "School website"), tags=[], featured=False,
                published=True, date=_date(2023, 6, 1)),
        Project(id="draft-project", title=_bilingual("Draf", "Draft"), category=WEB,
                description=_bilingual("Belum terbit", "Unpublished"), tags=[], featured=True,
                published=False, date=_date(2025, 1, 1)),
    ]
    author = {"name": "Rina", "avatar": "/rina.jpg", "bio": _bilingual("Penulis", "Writer")}
    posts = [
        BlogPost(slug="nextjs-tips", title=_bilingual("Tips Next.js", "Next.js Tips"),
                 excerpt=_bilingual("Ringkasan", "Summary"), content=_bilingual("Isi", "Body"),
                 category=WEB, tags=["nextjs"], author=author, read_time=4, published=True,
                 featured=True, date=_date(2024, 4, 1)),
        BlogPost(slug="seo-basics", title=_bilingual("Dasar SEO", "SEO Basics"),
                 excerpt=_bilingual("Ringkasan", "Summary"), content=_bilingual("Isi", "Body"),
                 category=WEB, tags=["seo"], author=author, read_time=6, published=True,
                 featured=False, date=_date(2024, 2, 1)),
        BlogPost(slug="flutter-intro", title=_bilingual("Pengenalan Flutter", "Flutter Intro"),
                 excerpt=_bilingual("Ringkasan", "Summary"), content=_bilingual("Isi", "Body"),
                 category=MOBILE, tags=["flutter"], author=author, read_time=5, published=True,
                 featured=False, date=_date(2024, 6, 1)),
    ]
    pages = [
        PageSEO(slug=slug, title=_bilingual(f"{slug} id", f"{slug} en"),
                description=_bilingual(f"Deskripsi {slug}", f"Description {slug}"),
                keywords=[slug], published=True)
        for slug in ("home", "about", "services", "work", "blog", "contact")
    ]
    db.add_all(projects + posts + pages)
    db.commit()
    return {"projects": projects, "posts": posts, "pages": pages}
