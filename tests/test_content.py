from consultancy_api.content import seed_content, slugify
from consultancy_api.models import BlogPost, Service


def _portfolio(**overrides):
    body = {
        "title": "Retail VR Showroom",
        "category": "XR",
        "description": "A virtual showroom for a furniture retailer.",
        "image": "https://images.example.com/showroom.jpg",
        "results": [
            {"metric": "Completion Time", "value": "-30%"},
            {"metric": "User Satisfaction", "value": "+45%"},
            {"metric": "Cost Savings", "value": "+20%"},
        ],
    }
    body.update(overrides)
    return body


def test_slugify():
    assert slugify("The Future of AI in Business") == "the-future-of-ai-in-business"
    assert slugify("  XR: what's next?  ") == "xr-whats-next"


def test_seed_is_idempotent(db):
    seed_content(db)
    seed_content(db)
    assert db.query(Service).count() == 3
    assert db.query(BlogPost).count() == 2


def test_public_reads_seeded_content(client, db):
    seed_content(db)

    services = client.get("/content/services").json()
    assert [s["id"] for s in services] == ["ai", "xr", "multimedia"]
    assert services[0]["videoUrl"].startswith("https://www.youtube.com/embed/")
    assert len(services[0]["features"]) == 5

    sections = client.get("/content/sections").json()
    assert [s["id"] for s in sections] == ["hero", "about", "contact"]

    post = client.get("/content/blog/future-of-ai-in-business").json()
    assert post["author"] == "Alexander Oguso"


def test_writes_require_admin(client, db, auth_headers):
    body = [{"id": "ai", "title": "AI", "description": "", "features": []}]

    assert client.put("/content/services", json=body).status_code == 401

    r = client.put("/content/services", json=body, headers=auth_headers)
    assert r.status_code == 403
    assert r.json() == {"error": "Admin only"}


def test_admin_replaces_services(client, db, admin_headers):
    seed_content(db)
    body = [
        {"id": "data", "title": "Data Strategy", "description": "Warehouses.", "videoUrl": None, "features": ["ETL"]},
        {"id": "ai", "title": "AI Solutions", "description": "Models.", "features": []},
    ]

    r = client.put("/content/services", json=body, headers=admin_headers)

    assert r.status_code == 200
    assert [s["id"] for s in client.get("/content/services").json()] == ["data", "ai"]


def test_duplicate_service_ids_rejected(client, admin_headers):
    body = [{"id": "ai", "title": "A"}, {"id": "ai", "title": "B"}]
    r = client.put("/content/services", json=body, headers=admin_headers)
    assert r.status_code == 400


def test_admin_replaces_sections(client, db, admin_headers):
    seed_content(db)
    r = client.put("/content/sections", json=[{"id": "hero", "title": "Hero", "content": "New tagline"}],
                   headers=admin_headers)
    assert r.status_code == 200
    assert client.get("/content/sections").json() == [{"id": "hero", "title": "Hero", "content": "New tagline"}]


def test_portfolio_crud(client, admin_headers):
    r = client.post("/content/portfolio", json=_portfolio(), headers=admin_headers)
    assert r.status_code == 201
    item = r.json()
    assert item["results"][1] == {"metric": "User Satisfaction", "value": "+45%"}

    r = client.put(f"/content/portfolio/{item['id']}", json=_portfolio(category="AI"), headers=admin_headers)
    assert r.status_code == 200
    assert client.get("/content/portfolio").json()[0]["category"] == "AI"

    assert client.delete(f"/content/portfolio/{item['id']}", headers=admin_headers).status_code == 200
    assert client.get("/content/portfolio").json() == []
    assert client.delete(f"/content/portfolio/{item['id']}", headers=admin_headers).status_code == 404


def test_portfolio_validation(client, admin_headers):
    assert client.post("/content/portfolio", json=_portfolio(title="VR"), headers=admin_headers).status_code == 400
    assert client.post("/content/portfolio", json=_portfolio(description="short"), headers=admin_headers).status_code == 400
    assert client.post("/content/portfolio", json=_portfolio(image="not a url"), headers=admin_headers).status_code == 400
    two_results = _portfolio()["results"][:2]
    assert client.post("/content/portfolio", json=_portfolio(results=two_results), headers=admin_headers).status_code == 400


def test_blog_create_generates_slug_and_defaults(client, admin_headers):
    r = client.post("/content/blog", json={"title": "Data Driven Culture", "content": "Body"}, headers=admin_headers)

    assert r.status_code == 201
    post = r.json()
    assert post["slug"] == "data-driven-culture"
    assert post["author"] == "Alexander Oguso"
    assert len(post["date"]) == 10

    assert client.get("/content/blog/data-driven-culture").json()["id"] == post["id"]


def test_blog_requires_title_and_content(client, admin_headers):
    r = client.post("/content/blog", json={"title": " ", "content": "Body"}, headers=admin_headers)
    assert r.status_code == 400
    assert "Title and content are required" in r.json()["error"]


def test_blog_slug_must_be_unique(client, admin_headers):
    client.post("/content/blog", json={"title": "Same", "content": "a"}, headers=admin_headers)
    r = client.post("/content/blog", json={"title": "Same", "content": "b"}, headers=admin_headers)
    assert r.status_code == 400


def test_blog_update_and_delete(client, admin_headers):
    post = client.post("/content/blog", json={"title": "Draft", "content": "a"}, headers=admin_headers).json()

    r = client.put(f"/content/blog/{post['id']}",
                   json={"title": "Draft", "slug": "draft", "content": "final", "imageUrl": "https://x.test/a.png"},
                   headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["imageUrl"] == "https://x.test/a.png"

    assert client.delete(f"/content/blog/{post['id']}", headers=admin_headers).status_code == 200
    assert client.get("/content/blog/draft").status_code == 404
