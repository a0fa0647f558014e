"""Unit tests for the article display mapping."""

from datetime import datetime, timezone

from peakflow.application.services import category_color, to_display
from peakflow.application.services.display import DISPLAY_DEFAULTS
from peakflow.domain.entities import Article


def test_defaults_fill_missing_image_and_read_time():
    article = Article(title="T", created_at=datetime(2024, 1, 5, tzinfo=timezone.utc))

    display = to_display(article)

    assert display.date == "Jan 5, 2024"
    assert display.image == DISPLAY_DEFAULTS["image"]
    assert display.read_time == "5 min read"


def test_present_values_are_kept():
    article = Article(
        title="T",
        image_url="https://cdn.example.com/a.jpg",
        read_time="12 min read",
        created_at=datetime(2023, 11, 20, tzinfo=timezone.utc),
    )

    display = to_display(article)

    assert display.image == "https://cdn.example.com/a.jpg"
    assert display.read_time == "12 min read"
    assert display.date == "Nov 20, 2023"


def test_unknown_category_uses_general_colour():
    assert category_color("Knitting") == category_color("general")
    assert category_color("Travel") == category_color("travel")
