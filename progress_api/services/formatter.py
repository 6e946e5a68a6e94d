"""
Renders results and errors as JSON, SVG or an embeddable HTML fragment.
"""

import json
from html import escape
from typing import Any, Dict, Union

from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from progress_api.schemas.responses import OutputFormat

SVG_MEDIA_TYPE = "image/svg+xml"

# Progress bar geometry (300x100 card, 280px track)
BAR_SCALE = 2.8
BAR_X = 10

FONT_FAMILY = "-apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif"

HTML_STYLE = f"""
<style>
  body {{ margin: 0; font-family: {FONT_FAMILY}; color: #37352f; background: transparent; }}
  .card {{ padding: 12px 16px; }}
  .title {{ font-size: 14px; font-weight: 600; margin-bottom: 8px; }}
  .track {{ width: 100%; height: 16px; background: #e9e9e7; border-radius: 8px; overflow: hidden; }}
  .fill {{ height: 100%; background: #2eaadc; }}
  .stats {{ display: flex; gap: 16px; margin-top: 8px; font-size: 13px; }}
  .stat b {{ font-size: 16px; }}
  .error {{ color: #eb5757; }}
</style>
""".strip()


def _as_dict(data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_none=True)
    return dict(data)


def _html_page(body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        f"<!DOCTYPE html><html><head><meta charset=\"utf-8\">{HTML_STYLE}</head>"
        f"<body><div class=\"card\">{body}</div></body></html>",
        status_code=status_code
    )


# =========================
# SVG
# =========================

def render_progress_svg(data: Dict[str, Any], title: str) -> str:
    progress = int(data.get("progress", 0))
    width = progress * BAR_SCALE
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="300" height="100" viewBox="0 0 300 100">'
        f'<text x="{BAR_X}" y="25" font-family="{FONT_FAMILY}" font-size="14" font-weight="600" fill="#37352f">'
        f"{escape(title)}</text>"
        f'<rect x="{BAR_X}" y="40" width="{100 * BAR_SCALE:g}" height="24" rx="12" fill="#e9e9e7"/>'
        f'<rect x="{BAR_X}" y="40" width="{width:g}" height="24" rx="12" fill="#2eaadc"/>'
        f'<text x="150" y="57" text-anchor="middle" font-family="{FONT_FAMILY}" font-size="12" fill="#37352f">'
        f"{progress}%</text>"
        f'<text x="{BAR_X}" y="85" font-family="{FONT_FAMILY}" font-size="11" fill="#787774">'
        f"{int(data.get('completed', 0))} / {int(data.get('total', 0))}</text>"
        "</svg>"
    )


def render_data_svg(data: Dict[str, Any], title: str) -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100" viewBox="0 0 200 100">'
        f'<text x="10" y="30" font-family="{FONT_FAMILY}" font-size="14" font-weight="600" fill="#37352f">'
        f"{escape(title)}</text>"
        f'<text x="10" y="60" font-family="{FONT_FAMILY}" font-size="10" fill="#37352f">'
        f"{escape(json.dumps(data, ensure_ascii=False))}</text>"
        "</svg>"
    )


# =========================
# HTML
# =========================

def render_progress_html(data: Dict[str, Any], title: str) -> str:
    progress = int(data.get("progress", 0))
    return (
        f'<div class="title">{escape(title)}</div>'
        f'<div class="track"><div class="fill" style="width: {progress}%"></div></div>'
        '<div class="stats">'
        f'<span class="stat"><b>{progress}%</b></span>'
        f'<span class="stat">completed <b>{int(data.get("completed", 0))}</b></span>'
        f'<span class="stat">total <b>{int(data.get("total", 0))}</b></span>'
        "</div>"
    )


def render_visits_html(data: Dict[str, Any], title: str) -> str:
    stats = [
        f'<span class="stat">total <b>{int(data.get("total", 0))}</b></span>',
        f'<span class="stat">today <b>{int(data.get("today", 0))}</b></span>',
    ]
    page = data.get("page")
    if page:
        stats.append(f'<span class="stat">{escape(str(page["url"]))} <b>{int(page["count"])}</b></span>')
    return f'<div class="title">{escape(title)}</div><div class="stats">{"".join(stats)}</div>'


# =========================
# Dispatch
# =========================

def format_response(
    data: Union[BaseModel, Dict[str, Any]],
    fmt: Union[OutputFormat, str],
    title: str
) -> Response:
    """
    Render `data` in the requested output format.

    Progress records (those carrying a `progress` key) get a bar; any other
    record is shown as its raw values.

    Raises:
        InvalidFormatError: `fmt` is not a known format
    """
    fmt = OutputFormat.parse(fmt)
    record = _as_dict(data)
    is_progress = "progress" in record

    if fmt is OutputFormat.JSON:
        return JSONResponse(record)

    if fmt is OutputFormat.SVG:
        svg = render_progress_svg(record, title) if is_progress else render_data_svg(record, title)
        return Response(svg, media_type=SVG_MEDIA_TYPE)

    body = render_progress_html(record, title) if is_progress else render_visits_html(record, title)
    return _html_page(body)


def format_error(message: str, status_code: int, fmt: OutputFormat, error_code: str = "error") -> Response:
    """Render an error in the caller's requested format."""
    if fmt is OutputFormat.SVG:
        svg = render_data_svg({"error": message}, "Error")
        return Response(svg, status_code=status_code, media_type=SVG_MEDIA_TYPE)

    if fmt.is_html:
        return _html_page(
            f'<div class="title">Error</div><div class="error">{escape(message)}</div>',
            status_code=status_code
        )

    return JSONResponse(status_code=status_code, content={"error": error_code, "message": message})


def format_invalid_format() -> Response:
    """Unknown `format` values cannot be honoured, so they are answered in plain text."""
    return PlainTextResponse("Invalid format", status_code=400)
