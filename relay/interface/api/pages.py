"""Minimal HTML pages for the browser OAuth flows."""

from html import escape

from fastapi.responses import HTMLResponse


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape(title)}</title>"
        "<style>body{font-family:sans-serif;max-width:32rem;margin:4rem auto;"
        "text-align:center}</style>"
        f"</head><body><h1>{escape(title)}</h1>{body}</body></html>"
    )


def success_page(
    title: str, message: str, link: tuple[str, str] | None = None
) -> HTMLResponse:
    """Successful flow step, with an optional follow-up link (href, label)."""
    body = f"<p>{escape(message)}</p>"
    if link:
        href, label = link
        body += f'<p><a href="{escape(href)}">{escape(label)}</a></p>'
    return HTMLResponse(_page(title, body))


def failure_page(
    title: str, message: str, retry_href: str, status_code: int = 400
) -> HTMLResponse:
    """Failed flow step with a retry link."""
    body = (
        f"<p>{escape(message)}</p>"
        f'<p><a href="{escape(retry_href)}">Try again</a></p>'
    )
    return HTMLResponse(_page(title, body), status_code=status_code)
