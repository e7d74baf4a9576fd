import re
from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from consultancy_api.auth import admin_user
from consultancy_api.db import get_db
from consultancy_api.errors import NotFoundError, ValidationError
from consultancy_api.models import Service, ContentSection, PortfolioItem, BlogPost
from consultancy_api.schemas import (
    ServiceData, ContentSectionData, PortfolioItemIn, PortfolioItemOut, BlogPostIn, BlogPostOut,
)

router = APIRouter()

DEFAULT_AUTHOR = "Alexander Oguso"

DEFAULT_SERVICES = [
    {
        "id": "ai",
        "title": "AI Solutions",
        "description": "Harness the power of AI to automate processes, gain insights, and create personalized experiences for your customers.",
        "video_url": "https://www.youtube.com/embed/5p248yoa3oE",
        "features": [
            "Predictive analytics and data modeling",
            "AI-powered customer experiences",
            "Process automation and optimization",
            "Natural language processing solutions",
            "Computer vision implementation",
        ],
    },
    {
        "id": "xr",
        "title": "XR Development",
        "description": "Create immersive experiences that blend digital and physical worlds using AR, VR, and MR technologies.",
        "video_url": "https://www.youtube.com/embed/2JgEzN7LYVo",
        "features": [
            "Virtual showrooms and product visualizations",
            "Augmented reality applications",
            "Virtual reality training solutions",
            "Mixed reality workplace innovations",
            "Immersive brand experiences",
        ],
    },
    {
        "id": "multimedia",
        "title": "Multimedia Production",
        "description": "Engage your audience with compelling multimedia content designed for the digital age.",
        "video_url": "https://www.youtube.com/embed/GtL1huin9EE",
        "features": [
            "Interactive storytelling experiences",
            "Video production and animation",
            "3D modeling and visualization",
            "Digital marketing assets",
            "Social media content strategies",
        ],
    },
]

DEFAULT_SECTIONS = [
    {"id": "hero", "title": "Hero Section", "content": "Alexander Oguso - Digital Transformation Services"},
    {"id": "about", "title": "About Section", "content": "Helping businesses transform digitally through AI, XR, and multimedia solutions."},
    {"id": "contact", "title": "Contact Information", "content": "Email: contact@alexanderoguso.com\nPhone: (555) 123-4567"},
]

SAMPLE_POSTS = [
    {
        "title": "The Future of AI in Business",
        "slug": "future-of-ai-in-business",
        "excerpt": "Exploring how artificial intelligence is transforming business operations and decision-making.",
        "content": "Artificial intelligence is rapidly changing how businesses operate. From automated customer service to predictive analytics, AI is enabling companies to work smarter and more efficiently.\n\nIn this post, we explore the latest trends in AI for business and how you can prepare your organization for the future.",
        "date": "2023-05-15",
        "author": DEFAULT_AUTHOR,
        "image_url": "https://images.unsplash.com/photo-1677442135968-6f8f4dd30868",
    },
    {
        "title": "XR Applications in Manufacturing",
        "slug": "xr-applications-in-manufacturing",
        "excerpt": "How extended reality technologies are revolutionizing the manufacturing sector.",
        "content": "Extended Reality (XR) technologies including VR and AR are creating new possibilities for manufacturing processes. Companies are using these technologies for training, maintenance, and quality control.\n\nThis post examines real-world case studies of XR implementation in manufacturing settings.",
        "date": "2023-06-22",
        "author": DEFAULT_AUTHOR,
        "image_url": "https://images.unsplash.com/photo-1633345472992-f2bbd6f1653f",
    },
]


def slugify(title: str) -> str:
    slug = re.sub(r"\s+", "-", title.strip().lower())
    return re.sub(r"[^\w-]+", "", slug)


def seed_content(db: Session):
    """Fill empty content tables with the site's starting copy."""
    if not db.query(Service).first():
        for pos, s in enumerate(DEFAULT_SERVICES):
            db.add(Service(position=pos, **s))
    if not db.query(ContentSection).first():
        for pos, s in enumerate(DEFAULT_SECTIONS):
            db.add(ContentSection(position=pos, **s))
    if not db.query(BlogPost).first():
        for p in SAMPLE_POSTS:
            db.add(BlogPost(**p))
    db.commit()


# ---------------------------
# Services
# ---------------------------
@router.get("/services", response_model=List[ServiceData])
def list_services(db: Session = Depends(get_db)):
    return db.query(Service).order_by(Service.position).all()


@router.put("/services", response_model=List[ServiceData])
def replace_services(services: List[ServiceData], me=Depends(admin_user), db: Session = Depends(get_db)):
    ids = [s.id for s in services]
    if len(ids) != len(set(ids)):
        raise ValidationError("Service ids must be unique")

    for row in db.query(Service).all():
        db.delete(row)
    db.flush()
    for pos, s in enumerate(services):
        db.add(Service(position=pos, **s.model_dump()))
    db.commit()
    return db.query(Service).order_by(Service.position).all()


# ---------------------------
# Content sections
# ---------------------------
@router.get("/sections", response_model=List[ContentSectionData])
def list_sections(db: Session = Depends(get_db)):
    return db.query(ContentSection).order_by(ContentSection.position).all()


@router.put("/sections", response_model=List[ContentSectionData])
def replace_sections(sections: List[ContentSectionData], me=Depends(admin_user), db: Session = Depends(get_db)):
    ids = [s.id for s in sections]
    if len(ids) != len(set(ids)):
        raise ValidationError("Section ids must be unique")

    for row in db.query(ContentSection).all():
        db.delete(row)
    db.flush()
    for pos, s in enumerate(sections):
        db.add(ContentSection(position=pos, **s.model_dump()))
    db.commit()
    return db.query(ContentSection).order_by(ContentSection.position).all()


# ---------------------------
# Portfolio
# ---------------------------
def _portfolio_fields(item: PortfolioItemIn) -> dict:
    return {
        "title": item.title,
        "category": item.category,
        "description": item.description,
        "image": str(item.image),
        "results": [r.model_dump() for r in item.results],
    }


@router.get("/portfolio", response_model=List[PortfolioItemOut])
def list_portfolio(db: Session = Depends(get_db)):
    return db.query(PortfolioItem).order_by(PortfolioItem.id).all()


@router.post("/portfolio", response_model=PortfolioItemOut, status_code=201)
def create_portfolio_item(item: PortfolioItemIn, me=Depends(admin_user), db: Session = Depends(get_db)):
    row = PortfolioItem(**_portfolio_fields(item))
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.put("/portfolio/{item_id}", response_model=PortfolioItemOut)
def update_portfolio_item(item_id: int, item: PortfolioItemIn, me=Depends(admin_user), db: Session = Depends(get_db)):
    row = db.query(PortfolioItem).filter(PortfolioItem.id == item_id).first()
    if not row:
        raise NotFoundError("Portfolio item not found")
    for key, value in _portfolio_fields(item).items():
        setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/portfolio/{item_id}")
def delete_portfolio_item(item_id: int, me=Depends(admin_user), db: Session = Depends(get_db)):
    row = db.query(PortfolioItem).filter(PortfolioItem.id == item_id).first()
    if not row:
        raise NotFoundError("Portfolio item not found")
    db.delete(row)
    db.commit()
    return {"ok": True}


# ---------------------------
# Blog
# ---------------------------
def _post_fields(post: BlogPostIn) -> dict:
    return {
        "title": post.title,
        "slug": post.slug.strip() or slugify(post.title),
        "excerpt": post.excerpt,
        "content": post.content,
        "date": post.date or date.today().isoformat(),
        "author": post.author or DEFAULT_AUTHOR,
        "image_url": post.image_url or None,
    }


def _ensure_slug_free(db: Session, slug: str, post_id: int = None):
    q = db.query(BlogPost).filter(BlogPost.slug == slug)
    if post_id is not None:
        q = q.filter(BlogPost.id != post_id)
    if q.first():
        raise ValidationError(f"Slug '{slug}' is already in use")


@router.get("/blog", response_model=List[BlogPostOut])
def list_posts(db: Session = Depends(get_db)):
    return db.query(BlogPost).order_by(BlogPost.date.desc(), BlogPost.id.desc()).all()


@router.get("/blog/{slug}", response_model=BlogPostOut)
def get_post(slug: str, db: Session = Depends(get_db)):
    post = db.query(BlogPost).filter(BlogPost.slug == slug).first()
    if not post:
        raise NotFoundError("Post not found")
    return post


@router.post("/blog", response_model=BlogPostOut, status_code=201)
def create_post(post: BlogPostIn, me=Depends(admin_user), db: Session = Depends(get_db)):
    fields = _post_fields(post)
    _ensure_slug_free(db, fields["slug"])
    row = BlogPost(**fields)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.put("/blog/{post_id}", response_model=BlogPostOut)
def update_post(post_id: int, post: BlogPostIn, me=Depends(admin_user), db: Session = Depends(get_db)):
    row = db.query(BlogPost).filter(BlogPost.id == post_id).first()
    if not row:
        raise NotFoundError("Post not found")
    fields = _post_fields(post)
    _ensure_slug_free(db, fields["slug"], post_id)
    for key, value in fields.items():
        setattr(row, key, value)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/blog/{post_id}")
def delete_post(post_id: int, me=Depends(admin_user), db: Session = Depends(get_db)):
    row = db.query(BlogPost).filter(BlogPost.id == post_id).first()
    if not row:
        raise NotFoundError("Post not found")
    db.delete(row)
    db.commit()
    return {"ok": True}
