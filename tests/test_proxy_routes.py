import pytest
import requests

from fakes import FakeResponse

PAGE = {
    "data": [{"id": 1, "image_path": "film/1.jpg"}, {"id": 2, "image_path": "film/2.jpg"}],
    "last_page": 3,
    "current_page": 2,
}


@pytest.mark.parametrize(
    "route, upstream, size_key",
    [
        ("/api/categories", "categories", "perPage"),
        ("/api/film-strip", "film-strip", "perPage"),
        ("/api/hero-sections", "hero-sections", "per_page"),
        ("/api/news", "news", "per_page"),
    ],
)
def test_list_routes_relay_page_unchanged(client, backend, route, upstream, size_key):
    backend.queue(FakeResponse(200, PAGE))

    response = client.get(route, params={"page": 2, "perPage": 5})

    assert response.status_code == 200
    assert response.json() == PAGE
    call = backend.last_call
    assert call.method == "GET"
    assert call.url == f"http://backend.test/api/{upstream}"
    assert call.params["page"] == 2
    assert call.params[size_key] == 5
    assert {"perPage", "per_page"} & set(call.params) == {size_key}


def test_list_accepts_bare_array(client, backend):
    backend.queue(FakeResponse(200, [{"id": 1, "title": "Opening"}]))

    response = client.get("/api/news")

    assert response.status_code == 200
    assert response.json() == [{"id": 1, "title": "Opening"}]


def test_list_applies_paging_defaults(client, backend):
    client.get("/api/categories")
    assert backend.last_call.params == {"page": 1, "perPage": 10}

    client.get("/api/news")
    assert backend.last_call.params == {"page": 1, "per_page": 10}


def test_list_accepts_snake_case_page_size(client, backend):
    client.get("/api/film-strip", params={"per_page": 25})

    assert backend.last_call.params == {"page": 1, "perPage": 25}


def test_list_rejects_oversized_page(client, backend):
    response = client.get("/api/categories", params={"perPage": 500})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation error"
    assert backend.calls == []


def test_hero_sections_sorting_and_filters_reshaped(client, backend):
    client.get(
        "/api/hero-sections",
        params={"page": 1, "perPage": 10, "sortBy": "id", "sortOrder": "asc", "status": "active", "search": "beach"},
    )

    assert backend.last_call.params == {
        "page": 1,
        "per_page": 10,
        "sort_by": "id",
        "sort_order": "asc",
        "status": "active",
        "search": "beach",
    }


def test_hero_sections_sort_defaults(client, backend):
    client.get("/api/hero-sections")

    params = backend.last_call.params
    assert params["sort_by"] == "created_at"
    assert params["sort_order"] == "desc"
    assert "status" not in params
    assert "search" not in params


def test_hero_sections_reject_unknown_status(client, backend):
    response = client.get("/api/hero-sections", params={"status": "archived"})

    assert response.status_code == 400
    assert backend.calls == []


def test_create_category_with_two_images(admin_client, backend):
    category = {
        "id": 12,
        "name": "Weddings",
        "images": [
            {"id": 1, "category_id": 12, "image_path": "categories/a.jpg", "sort_order": 0},
            {"id": 2, "category_id": 12, "image_path": "categories/b.jpg", "sort_order": 1},
        ],
    }
    backend.queue(FakeResponse(200, {"message": "Category created", "category": category}))

    response = admin_client.post(
        "/api/categories",
        data={"name": "Weddings"},
        files=[
            ("images[]", ("a.jpg", b"first-image", "image/jpeg")),
            ("images[]", ("b.jpg", b"second-image", "image/jpeg")),
        ],
    )

    assert response.status_code == 201
    assert response.json()["category"]["name"] == "Weddings"
    assert len(response.json()["category"]["images"]) == 2

    call = backend.last_call
    assert call.method == "POST"
    assert call.url == "http://backend.test/api/categories"
    assert call.kwargs["data"] == [("name", "Weddings")]
    assert call.kwargs["files"] == [
        ("images[]", ("a.jpg", b"first-image", "image/jpeg")),
        ("images[]", ("b.jpg", b"second-image", "image/jpeg")),
    ]
    assert call.headers["Authorization"] == "Bearer admin-token-123"


def test_requests_without_session_send_no_token(client, backend):
    client.get("/api/news")

    assert "Authorization" not in backend.last_call.headers
    assert backend.last_call.headers["Accept"] == "application/json"


def test_upstream_json_error_is_relayed(admin_client, backend):
    backend.queue(FakeResponse(422, {
        "message": "The name field is required.",
        "errors": {"name": ["The name field is required."]},
    }))

    response = admin_client.post("/api/categories", data={"description": "x"}, files=[])

    assert response.status_code == 422
    assert response.json() == {
        "error": "The name field is required.",
        "message": "The name field is required.",
        "errors": {"name": ["The name field is required."]},
    }


def test_upstream_error_field_preferred_over_message(client, backend):
    backend.queue(FakeResponse(404, {"error": "News not found", "message": "No query results"}))

    response = client.get("/api/news/99")

    assert response.status_code == 404
    assert response.json()["error"] == "News not found"


def test_upstream_non_json_error_uses_fixed_message(client, backend):
    backend.queue(FakeResponse(502, text="<html><body>Bad Gateway</body></html>"))

    response = client.get("/api/news")

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to fetch news", "message": "Failed to fetch news"}


def test_transport_failure_answers_500(client, backend):
    backend.error = requests.ConnectionError("Connection refused")

    response = client.get("/api/categories")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to fetch categories"
    assert "Connection refused" in body["detail"]


def test_unparseable_success_body_answers_500(client, backend):
    backend.queue(FakeResponse(200, text="<!doctype html>"))

    response = client.get("/api/film-strip")

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch film strip images"


def test_multipart_update_is_spoofed_as_post(admin_client, backend):
    backend.queue(FakeResponse(200, {"id": 3, "title": "Updated"}))

    response = admin_client.put(
        "/api/news/3",
        data={"title": "Updated", "description": "Body"},
        files=[("images[]", ("new.png", b"png-bytes", "image/png"))],
    )

    assert response.status_code == 200
    call = backend.last_call
    assert call.method == "POST"
    assert call.url == "http://backend.test/api/news/3"
    assert ("_method", "PUT") in call.kwargs["data"]
    assert ("title", "Updated") in call.kwargs["data"]
    assert call.kwargs["files"] == [("images[]", ("new.png", b"png-bytes", "image/png"))]


def test_json_update_is_sent_as_put(admin_client, backend):
    backend.queue(FakeResponse(200, {"id": 2, "name": "Portraits"}))

    response = admin_client.put("/api/categories/2", json={"name": "Portraits"})

    assert response.status_code == 200
    call = backend.last_call
    assert call.method == "PUT"
    assert call.kwargs["json"] == {"name": "Portraits"}
    assert "data" not in call.kwargs


def test_delete_with_empty_body_returns_message(admin_client, backend):
    backend.queue(FakeResponse(204))

    response = admin_client.delete("/api/categories/4")

    assert response.status_code == 200
    assert response.json() == {"message": "Category deleted successfully"}
    assert backend.last_call.method == "DELETE"
    assert backend.last_call.url == "http://backend.test/api/categories/4"


def test_delete_relays_backend_body(admin_client, backend):
    backend.queue(FakeResponse(200, {"message": "Hero section removed"}))

    response = admin_client.delete("/api/hero-sections/8")

    assert response.json() == {"message": "Hero section removed"}


def test_film_strip_delete_targets_single_api_prefix(admin_client, backend):
    backend.queue(FakeResponse(204))

    response = admin_client.delete("/api/film-strip/9")

    assert response.status_code == 200
    assert backend.last_call.url == "http://backend.test/api/film-strip/9"


def test_film_strip_upload_answers_201(admin_client, backend):
    backend.queue(FakeResponse(200, {"message": "2 images uploaded"}))

    response = admin_client.post(
        "/api/film-strip",
        files=[
            ("images[]", ("1.jpg", b"one", "image/jpeg")),
            ("images[]", ("2.jpg", b"two", "image/jpeg")),
        ],
    )

    assert response.status_code == 201
    assert len(backend.last_call.kwargs["files"]) == 2


def test_portfolio_list_forwards_only_given_filters(client, backend):
    backend.queue(FakeResponse(200, [{"id": 1}]), FakeResponse(200, [{"id": 1}]))

    client.get("/api/portfolio")
    assert backend.last_call.params is None

    client.get("/api/portfolio", params={"category": "Wedding"})
    assert backend.last_call.params == {"category": "Wedding"}


def test_portfolio_create_forwards_single_image(admin_client, backend):
    backend.queue(FakeResponse(200, {"id": 5, "title": "Dunes"}))

    response = admin_client.post(
        "/api/portfolio",
        data={"title": "Dunes", "category": "Landscape", "alt": "Sand dunes", "camera": "X100V"},
        files=[("image", ("dunes.jpg", b"jpeg", "image/jpeg"))],
    )

    assert response.status_code == 201
    assert backend.last_call.kwargs["files"][0][0] == "image"


def test_portfolio_categories_pass_through(client, backend):
    backend.queue(FakeResponse(200, ["Wedding", "Portrait"]))

    response = client.get("/api/portfolio/category")

    assert response.status_code == 200
    assert response.json() == ["Wedding", "Portrait"]
    assert backend.last_call.url == "http://backend.test/api/portfolio/categories"


def test_portfolio_categories_failure_still_returns_list(client, backend):
    backend.queue(FakeResponse(503, {"message": "Maintenance"}))

    response = client.get("/api/portfolio/category")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Maintenance", "data": []}


def test_portfolio_categories_transport_failure(client, backend):
    backend.error = requests.Timeout("timed out")

    response = client.get("/api/portfolio/category")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch categories", "data": []}


def test_get_single_record(client, backend):
    backend.queue(FakeResponse(200, {"id": 7, "name": "Events", "images": []}))

    response = client.get("/api/categories/7")

    assert response.status_code == 200
    assert response.json()["id"] == 7
    assert backend.last_call.url == "http://backend.test/api/categories/7"
