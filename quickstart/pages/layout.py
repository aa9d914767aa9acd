"""
Shared page layout and small HTML components.

Pages are rendered as inline HTML; every value taken from claims or query
parameters goes through html.escape.
"""

from html import escape
from typing import Optional
from urllib.parse import urlencode

from fastapi.responses import HTMLResponse

from quickstart.auth.claims import UserClaims


_STYLES = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
        font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
        display: flex;
        min-height: 100vh;
        color: #1f2937;
    }
    .sidebar {
        width: 250px;
        background: linear-gradient(180deg, #052767 0%, #3a0647 70%);
        padding: 24px 16px;
    }
    .sidebar a {
        display: block;
        color: #d7d7d7;
        text-decoration: none;
        padding: 8px 12px;
        border-radius: 4px;
        margin-bottom: 4px;
    }
    .sidebar a.active, .sidebar a:hover { background: rgba(255,255,255,0.25); color: white; }
    .brand { color: white; font-size: 18px; font-weight: 600; margin-bottom: 24px; }
    main { flex: 1; }
    .top-row {
        background: #f7f7f7;
        border-bottom: 1px solid #d6d5d5;
        height: 56px;
        display: flex;
        align-items: center;
        justify-content: flex-end;
        padding: 0 24px;
        gap: 16px;
    }
    .content { padding: 24px 32px; }
    h1 { font-size: 28px; margin-bottom: 16px; }
    p { margin-bottom: 12px; line-height: 1.6; }
    table { border-collapse: collapse; width: 100%; max-width: 640px; }
    th, td { text-align: left; padding: 8px 12px; border-bottom: 1px solid #e5e7eb; }
    .avatar { width: 96px; height: 96px; border-radius: 50%; margin-bottom: 16px; }
    .button {
        display: inline-block;
        background: #1b6ec2;
        color: white;
        padding: 8px 20px;
        border-radius: 6px;
        text-decoration: none;
    }
    .error { color: #b91c1c; }
"""

_NAV_ITEMS = [
    ("/", "Home"),
    ("/fetchdata", "Fetch data"),
    ("/profile", "Profile"),
]


def login_url(return_url: str = "/") -> str:
    return f"/login?{urlencode({'redirectUri': return_url})}"


def render_login_display(user: Optional[UserClaims], current_path: str = "/") -> str:
    """Greeting with a logout link for signed-in users, a login link otherwise."""
    if user is None:
        return f'<a href="{escape(login_url(current_path))}">Log in</a>'

    return (
        f"<span>Hello, {escape(user.name)}!</span>"
        '<a href="/logout">Log out</a>'
    )


def _render_nav(current_path: str) -> str:
    links = []
    for path, label in _NAV_ITEMS:
        css_class = ' class="active"' if path == current_path else ""
        links.append(f'<a href="{path}"{css_class}>{label}</a>')
    return "\n".join(links)


def render_page(
    title: str,
    body: str,
    user: Optional[UserClaims] = None,
    current_path: str = "/",
    status_code: int = 200,
) -> HTMLResponse:
    """
    Render a full page inside the shared layout.

    Args:
        title: Page title
        body: Already-escaped HTML for the content area
        user: Signed-in user for the login display
        current_path: Path of the page (active nav item, login return URL)
        status_code: HTTP status code

    Returns:
        HTMLResponse
    """
    html_content = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)}</title>
    <style>{_STYLES}</style>
</head>
<body>
    <nav class="sidebar">
        <div class="brand">Auth0 Quickstart</div>
        {_render_nav(current_path)}
    </nav>
    <main>
        <div class="top-row">
            {render_login_display(user, current_path)}
        </div>
        <div class="content">
            {body}
        </div>
    </main>
</body>
</html>
"""
    return HTMLResponse(content=html_content, status_code=status_code)


def render_error_page(
    title: str,
    message: str,
    user: Optional[UserClaims] = None,
    show_retry: bool = True,
    status_code: int = 400,
) -> HTMLResponse:
    """
    Render an error page.

    Args:
        title: Error title
        message: Error message (no token values)
        user: Signed-in user, if any
        show_retry: Whether to show a retry login button
        status_code: HTTP status code
    """
    retry_button = (
        f'<a href="{escape(login_url())}" class="button">Try Again</a>'
        if show_retry else ""
    )

    body = f"""
            <h1>{escape(title)}</h1>
            <p class="error">{escape(message)}</p>
            {retry_button}
    """
    return render_page(title, body, user=user, status_code=status_code)
