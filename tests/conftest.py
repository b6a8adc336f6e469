"""Shared fixtures: sample API payloads and fake HTTP responses."""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

ABYS = {
    "id": "abys",
    "name": "Abyssinian",
    "temperament": "Active, Energetic, Independent",
    "origin": "Egypt",
    "life_span": "14 - 15",
    "weight": {"imperial": "7  -  10", "metric": "3 - 5"},
    "description": "The Abyssinian is easy to care for.",
    "wikipedia_url": "https://en.wikipedia.org/wiki/Abyssinian_(cat)",
}
BENG = {"id": "beng", "name": "Bengal", "origin": "United States", "life_span": "12 - 15"}


def image_payload(image_id: str, breeds: list | None = None) -> dict:
    """Build one /images/search entry."""
    data: dict[str, Any] = {
        "id": image_id,
        "url": f"https://cdn2.thecatapi.com/images/{image_id}.jpg",
        "width": 800,
        "height": 600,
    }
    if breeds is not None:
        data["breeds"] = breeds
    return data


def page_payload(prefix: str, count: int = 9) -> list[dict]:
    """Build a full page of breed-less images."""
    return [image_payload(f"{prefix}{i}") for i in range(count)]


def json_response(payload: Any, status: int = 200) -> MagicMock:
    """Fake requests.Response returning `payload` from .json()."""
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    return resp


@pytest.fixture
def session() -> MagicMock:
    """Fake requests.Session with a real headers dict."""
    fake = MagicMock()
    fake.headers = {}
    return fake
