"""
Tests for response formatting.
"""

import json

import pytest

from progress_api.schemas.responses import OutputFormat, PageVisits, ProgressResult, VisitCounters
from progress_api.services.formatter import format_error, format_response
from progress_api.utils.exceptions import InvalidFormatError


def test_json_round_trip():
    data = VisitCounters(total=10, today=3, page=PageVisits(url="/a", count=2))

    response = format_response(data, OutputFormat.JSON, "Visits")

    assert response.media_type == "application/json"
    assert VisitCounters.model_validate(json.loads(response.body)) == data


def test_json_omits_absent_page():
    response = format_response(VisitCounters(total=1, today=1), "json", "Visits")
    assert json.loads(response.body) == {"total": 1, "today": 1}


def test_plain_dict_is_accepted():
    response = format_response({"total": 2, "completed": 1, "progress": 50}, "json", "Progress")
    assert json.loads(response.body) == {"total": 2, "completed": 1, "progress": 50}


def test_unknown_format_raises():
    with pytest.raises(InvalidFormatError):
        format_response({"total": 1}, "png", "Visits")


@pytest.mark.parametrize("progress,width", [(0, "0"), (25, "70"), (100, "280")])
def test_progress_bar_width(progress, width):
    data = ProgressResult(total=100, completed=progress, progress=progress)

    response = format_response(data, OutputFormat.SVG, "Progress")

    assert response.media_type == "image/svg+xml"
    assert 'fill="#2eaadc"' in response.body.decode()
    assert f'y="40" width="{width}" height="24" rx="12" fill="#2eaadc"' in response.body.decode()


def test_html_escapes_values():
    data = VisitCounters(total=1, today=1, page=PageVisits(url="<script>alert(1)</script>", count=1))

    body = format_response(data, OutputFormat.IFRAME, "Visits").body.decode()

    assert "<script>" not in body
    assert "&lt;script&gt;" in body


def test_svg_escapes_title():
    body = format_response({"total": 1}, OutputFormat.SVG, "A & B").body.decode()
    assert "A &amp; B" in body


def test_html_has_no_external_references():
    body = format_response(ProgressResult(total=1, completed=1, progress=100), "iframe", "Progress").body.decode()
    assert "http://" not in body.replace("http://www.w3.org", "")
    assert "https://" not in body


@pytest.mark.parametrize("fmt,media_type", [
    (OutputFormat.JSON, "application/json"),
    (OutputFormat.SVG, "image/svg+xml"),
    (OutputFormat.IFRAME, "text/html"),
    (OutputFormat.HTML, "text/html"),
])
def test_format_error(fmt, media_type):
    response = format_error("Error occurred", 500, fmt, "internal_error")

    assert response.status_code == 500
    assert response.media_type == media_type
    assert "Error occurred" in response.body.decode()


def test_parse_defaults_to_json():
    assert OutputFormat.parse(None) is OutputFormat.JSON
    assert OutputFormat.parse("") is OutputFormat.JSON
    assert OutputFormat.parse("svg") is OutputFormat.SVG
