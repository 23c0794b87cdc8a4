"""Tests for image and derived image endpoints."""

import pytest
from sqlalchemy import text

from atelier.services.artwork_service import ConflictError, get_artwork
from atelier.services.artwork_service import add_image as add_image_to_artwork
from atelier.services.derivative_coordinator import run_derivative_task


@pytest.fixture
def artwork(client, headers, complete_artwork_payload):
    return client.post("/v1/artworks", json=complete_artwork_payload, headers=headers).json()


def add_image(client, headers, artwork_id, url, make_primary=False):
    response = client.post(
        f"/v1/artworks/{artwork_id}/images",
        json={"image_url": url, "make_primary": make_primary},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def derivative_tasks(client, headers, artwork_id):
    return client.get(f"/v1/artworks/{artwork_id}/derivatives", headers=headers).json()["items"]


class TestImages:
    """Tests for image management."""

    def test_first_image_is_primary_and_queues_derivatives(self, client, headers, artwork, dispatched):
        data = add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")

        image = data["images"][0]
        assert image["is_primary"]
        assert image["watermark_status"] == "pending"
        assert image["visualization_status"] == "pending"
        assert data["version"] == 2

        tasks = derivative_tasks(client, headers, artwork["id"])
        assert len(tasks) == 1
        assert tasks[0]["force_watermark"] and tasks[0]["force_visualization"]
        assert dispatched.task_ids == [tasks[0]["id"]]

    def test_requests_coalesce_into_pending_task(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")

        assert len(derivative_tasks(client, headers, artwork["id"])) == 1

    def test_make_primary_puts_image_first(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")

        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg", make_primary=True)

        assert [img["image_url"] for img in data["images"]] == [
            "https://img.example.com/b.jpg",
            "https://img.example.com/a.jpg",
        ]
        assert [img["is_primary"] for img in data["images"]] == [True, False]

    def test_reorder_images(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")
        first, second = [img["id"] for img in data["images"]]

        response = client.put(
            f"/v1/artworks/{artwork['id']}/images/order",
            json={"image_ids": [second, first]},
            headers=headers,
        )

        images = response.json()["images"]
        assert response.status_code == 200
        assert [img["id"] for img in images] == [second, first]
        assert images[0]["is_primary"] and not images[1]["is_primary"]

    def test_reorder_requires_every_image(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")

        response = client.put(
            f"/v1/artworks/{artwork['id']}/images/order",
            json={"image_ids": [data["images"][0]["id"]]},
            headers=headers,
        )

        assert response.status_code == 400

    def test_set_primary(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")
        second = data["images"][1]["id"]

        response = client.post(f"/v1/artworks/{artwork['id']}/images/{second}/primary", headers=headers)

        assert response.json()["images"][0]["id"] == second

    def test_remove_primary_promotes_next(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")
        first, second = [img["id"] for img in data["images"]]

        response = client.delete(f"/v1/artworks/{artwork['id']}/images/{first}", headers=headers)

        images = response.json()["images"]
        assert [img["id"] for img in images] == [second]
        assert images[0]["is_primary"]
        assert images[0]["position"] == 0

    def test_unknown_image(self, client, headers, artwork):
        response = client.delete(f"/v1/artworks/{artwork['id']}/images/missing", headers=headers)
        assert response.status_code == 404


class TestDerivatives:
    """Tests for derived image regeneration."""

    def test_regenerate_without_image_rejected(self, client, headers, artwork):
        response = client.post(
            f"/v1/artworks/{artwork['id']}/derivatives/regenerate", json={}, headers=headers
        )
        assert response.status_code == 400

    def test_worker_result_and_manual_regeneration(self, client, headers, test_db, artwork, compositor):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        task_id = derivative_tasks(client, headers, artwork["id"])[0]["id"]
        run_derivative_task(test_db, task_id, compositor)

        image = client.get(f"/v1/artworks/{artwork['id']}", headers=headers).json()["images"][0]
        assert image["watermarked_image_url"] == compositor.watermarked_image_url
        assert image["watermark_status"] == "ready"
        assert image["visualization_status"] == "ready"

        response = client.post(
            f"/v1/artworks/{artwork['id']}/derivatives/regenerate",
            json={"watermark": True, "visualization": False},
            headers=headers,
        )

        task = response.json()
        assert response.status_code == 202
        assert task["id"] != task_id
        assert task["status"] == "pending"
        assert task["force_watermark"] and not task["force_visualization"]

    def test_dimension_change_requests_visualization_only(self, client, headers, test_db, artwork, compositor):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        run_derivative_task(test_db, derivative_tasks(client, headers, artwork["id"])[0]["id"], compositor)

        client.put(
            f"/v1/artworks/{artwork['id']}",
            json={"dimensions": {"width": 100, "height": 140, "unit": "cm"}},
            headers=headers,
        )

        pending = [t for t in derivative_tasks(client, headers, artwork["id"]) if t["status"] == "pending"]
        assert len(pending) == 1
        assert pending[0]["force_visualization"] and not pending[0]["force_watermark"]


class TestImageVersions:
    """Image changes take part in optimistic versioning."""

    def test_stale_version_on_add_rejected(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")

        response = client.post(
            f"/v1/artworks/{artwork['id']}/images",
            json={"image_url": "https://img.example.com/b.jpg", "expected_version": 1},
            headers=headers,
        )

        assert response.status_code == 409
        assert response.json()["detail"]["current_version"] == 2

    def test_matching_version_on_reorder_accepted(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")
        first, second = [img["id"] for img in data["images"]]

        response = client.put(
            f"/v1/artworks/{artwork['id']}/images/order",
            json={"image_ids": [second, first], "expected_version": data["version"]},
            headers=headers,
        )

        assert response.status_code == 200
        assert response.json()["version"] == data["version"] + 1

    def test_stale_version_on_primary_and_remove_rejected(self, client, headers, artwork):
        add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")
        data = add_image(client, headers, artwork["id"], "https://img.example.com/b.jpg")
        first, second = [img["id"] for img in data["images"]]

        primary = client.post(
            f"/v1/artworks/{artwork['id']}/images/{second}/primary?expected_version=1", headers=headers
        )
        removed = client.delete(
            f"/v1/artworks/{artwork['id']}/images/{first}?expected_version=1", headers=headers
        )

        assert primary.status_code == 409
        assert removed.status_code == 409
        unchanged = client.get(f"/v1/artworks/{artwork['id']}", headers=headers).json()
        assert [img["id"] for img in unchanged["images"]] == [first, second]
        assert unchanged["version"] == data["version"]

    def test_stale_version_on_regenerate_rejected(self, client, headers, artwork):
        data = add_image(client, headers, artwork["id"], "https://img.example.com/a.jpg")

        response = client.post(
            f"/v1/artworks/{artwork['id']}/derivatives/regenerate",
            json={"watermark": True, "expected_version": data["version"] - 1},
            headers=headers,
        )

        assert response.status_code == 409

    def test_image_change_detects_concurrent_save(self, test_db, artist, artwork):
        stored = get_artwork(test_db, artwork["id"], artist.id)
        assert stored.version == 1

        # Another session saves behind this session's back
        test_db.connection().execute(
            text("UPDATE artworks SET version = version + 1 WHERE id = :id"),
            {"id": artwork["id"]},
        )

        with pytest.raises(ConflictError):
            add_image_to_artwork(test_db, artwork["id"], artist.id, "https://img.example.com/a.jpg")
