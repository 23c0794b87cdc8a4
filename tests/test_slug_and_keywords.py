"""Tests for slug generation and keyword extraction."""

import pytest

from atelier.services.keywords import extract_keywords, merge_keywords
from atelier.services.slug_service import generate_unique_slug, slugify


class TestSlugify:
    """Tests for slugify function."""

    def test_lowercase_and_hyphens(self):
        assert slugify("Blue Harbour") == "blue-harbour"

    def test_accents_stripped(self):
        assert slugify("Nuit Étoilée, No. 2") == "nuit-etoilee-no-2"

    def test_punctuation_collapsed(self):
        assert slugify("  --Hello!!  World--  ") == "hello-world"

    def test_empty_falls_back(self):
        assert slugify("") == "untitled"
        assert slugify("!!!") == "untitled"


class TestGenerateUniqueSlug:
    """Tests for generate_unique_slug."""

    def test_free_slug(self, test_db, artist):
        assert generate_unique_slug(test_db, "Blue Harbour", "artworks") == "blue-harbour"

    def test_collision_suffix(self, test_db, artist):
        assert artist.slug == "jane-doe"
        assert generate_unique_slug(test_db, "Jane Doe", "artists") == "jane-doe-2"

    def test_own_slug_excluded(self, test_db, artist):
        assert generate_unique_slug(test_db, "Jane Doe", "artists", exclude_id=artist.id) == "jane-doe"

    def test_unknown_namespace(self, test_db):
        with pytest.raises(ValueError):
            generate_unique_slug(test_db, "x", "sculptures")

    def test_duplicate_artwork_titles(self, client, headers, complete_artwork_payload):
        first = client.post("/v1/artworks", json=complete_artwork_payload, headers=headers).json()
        second = client.post("/v1/artworks", json=complete_artwork_payload, headers=headers).json()
        third = client.post("/v1/artworks", json=complete_artwork_payload, headers=headers).json()
        assert [first["slug"], second["slug"], third["slug"]] == [
            "blue-harbour",
            "blue-harbour-2",
            "blue-harbour-3",
        ]


class TestKeywords:
    """Tests for keyword extraction."""

    def test_extract_skips_stop_words_and_short_words(self):
        assert extract_keywords("The Blue Harbour", "A study of it", "oil on canvas") == [
            "blue",
            "harbour",
            "study",
            "oil",
            "canvas",
        ]

    def test_extract_deduplicates(self):
        assert extract_keywords("Sea sea SEA", None, None) == ["sea"]

    def test_extract_empty(self):
        assert extract_keywords(None, None, None) == []

    def test_merge_preserves_first_occurrence(self):
        assert merge_keywords(["coast", "blue"], ["blue", "fog"], None) == ["coast", "blue", "fog"]
