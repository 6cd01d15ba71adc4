"""
HTML Templates - Named snippets for the admin panel
====================================================

Every template is a plain function taking a data mapping and returning
HTML. Values coming from data are escaped; copy is static.
"""

import html
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..domain.collaborators import TemplateRenderer
from ..domain.models import FooterLink


class TemplateNotFoundError(KeyError):
    """Raised when rendering a template name nobody registered."""
    pass


def _e(value: Any) -> str:
    return html.escape(str(value), quote=True)


# ══════════════════════════════════════════════════════════════════
#  SHARED CSS
# ══════════════════════════════════════════════════════════════════

SHARED_CSS = """
    :root {
        --bg: #f0f0f1;
        --card: #ffffff;
        --border: #c3c4c7;
        --text: #1d2327;
        --text-muted: #646970;
        --accent: #e27730;
        --info: #72aee6;
    }

    * { box-sizing: border-box; }

    body {
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
        background: var(--bg);
        color: var(--text);
        margin: 0;
        font-size: 13px;
    }

    .wrap { max-width: 1100px; margin: 0 auto; padding: 20px; }

    .notice {
        background: var(--card);
        border: 1px solid var(--border);
        border-left: 4px solid var(--info);
        padding: 8px 12px;
        margin: 0 0 16px;
    }
    .notice-warning { border-left-color: #dba617; }
    .notice-error { border-left-color: #d63638; }

    .card { background: var(--card); border: 1px solid var(--border); padding: 24px; }

    .promotion-footer { text-align: center; color: var(--text-muted); margin: 40px 0 10px; }
    .promotion-footer .title { font-weight: 600; }
    .promotion-footer a { color: var(--text-muted); }
    .promotion-footer .sep { margin: 0 8px; opacity: 0.6; }

    #footer { color: var(--text-muted); border-top: 1px solid var(--border); padding: 12px 0; }
    #footer a { color: var(--accent); }
"""

# Any link with the dismiss class closes its notice and tells the server.
DISMISS_SCRIPT = """
document.addEventListener('click', function (e) {
    var link = e.target.closest('.{ns}-notice-dismiss');
    if (!link) { return; }
    var notice = link.closest('[data-notice-slug]');
    if (!notice) { return; }
    if (link.getAttribute('href') === '#') { e.preventDefault(); }
    fetch('/notices/' + encodeURIComponent(notice.dataset.noticeSlug) + '/dismiss', {
        method: 'POST', credentials: 'same-origin'
    });
    notice.remove();
});
"""


# ══════════════════════════════════════════════════════════════════
#  TEMPLATES
# ══════════════════════════════════════════════════════════════════

def render_review_request(data: Mapping[str, Any]) -> str:
    ns = _e(data.get("namespace", "wpforms"))
    url = _e(data["review_url"])
    name = _e(data.get("plugin_name", "WPForms"))
    return f"""<p>Hey, there! It looks like you enjoy creating forms with {name}. Would you do us a favor and take a few seconds to give us a 5-star review? We’d love to hear from you.</p>
<p>
    <a href="{url}" class="{ns}-notice-dismiss {ns}-review-out" target="_blank" rel="noopener noreferrer">Ok, you deserve it</a><br>
    <a href="#" class="{ns}-notice-dismiss" target="_blank" rel="noopener noreferrer">Nope, maybe later</a><br>
    <a href="#" class="{ns}-notice-dismiss" target="_blank" rel="noopener noreferrer">I already did</a>
</p>"""


def render_footer_rating(data: Mapping[str, Any]) -> str:
    url = _e(data["review_url"])
    name = _e(data.get("plugin_name", "WPForms"))
    return (
        f'Please rate <strong>{name}</strong> '
        f'<a href="{url}" target="_blank" rel="noopener noreferrer">&#9733;&#9733;&#9733;&#9733;&#9733;</a> '
        f'on <a href="{url}" target="_blank" rel="noopener">WordPress.org</a> '
        f'to help us spread the word.'
    )


def _render_link(link: FooterLink) -> str:
    target = ""
    if link.target:
        target = f' target="{_e(link.target)}" rel="noopener noreferrer"'
    return f'<a href="{_e(link.url)}"{target}>{_e(link.text)}</a>'


def render_promotion(data: Mapping[str, Any]) -> str:
    links: List[FooterLink] = list(data.get("links", []))
    joined = '<span class="sep">/</span>'.join(_render_link(link) for link in links)
    return f"""<div class="promotion-footer">
    <p class="title">{_e(data.get("title", ""))}</p>
    <p class="links">{joined}</p>
</div>"""


def render_admin_page(data: Mapping[str, Any]) -> str:
    """Full admin page shell. `notices`, `promotion` and `footer_text` are trusted HTML."""
    title = _e(data.get("title", "Dashboard"))
    ns = _e(data.get("namespace", "wpforms"))
    script = DISMISS_SCRIPT.replace("{ns}", ns)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>{SHARED_CSS}</style>
</head>
<body class="screen-{_e(data.get("screen_id", ""))}">
    <div class="wrap">
        <div id="notices">{data.get("notices", "")}</div>
        <div class="card">
            <h1>{title}</h1>
            <p>{_e(data.get("body", ""))}</p>
        </div>
        {data.get("promotion", "")}
        <div id="footer"><p id="footer-left">{data.get("footer_text", "")}</p></div>
    </div>
    <script>{script}</script>
</body>
</html>"""


def render_login_page(data: Mapping[str, Any]) -> str:
    message = data.get("message", "")
    msg_html = f'<div class="notice notice-error">{_e(message)}</div>' if message else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Log In</title>
    <style>{SHARED_CSS}</style>
</head>
<body>
    <div class="wrap" style="max-width: 360px;">
        {msg_html}
        <form class="card" method="post" action="/login">
            <p><label>Username<br><input type="text" name="username" required></label></p>
            <p><label>Password<br><input type="password" name="password" required></label></p>
            <p><button type="submit">Log In</button></p>
        </form>
    </div>
</body>
</html>"""


TEMPLATES: Dict[str, Callable[[Mapping[str, Any]], str]] = {
    "admin/review-request": render_review_request,
    "admin/footer-rating": render_footer_rating,
    "admin/promotion": render_promotion,
    "admin/page": render_admin_page,
    "login": render_login_page,
}


class HtmlTemplateRenderer(TemplateRenderer):
    """
    Renders registered templates.

    With return_string=False the output is appended to `sink` (the page
    being built) and an empty string is returned.
    """

    def __init__(self, templates: Optional[Dict[str, Callable[[Mapping[str, Any]], str]]] = None):
        self.templates = dict(TEMPLATES if templates is None else templates)
        self.sink: List[str] = []

    def render(self, name: str, data: Mapping[str, Any], return_string: bool = True) -> str:
        template = self.templates.get(name)
        if template is None:
            raise TemplateNotFoundError(name)

        output = template(data)
        if return_string:
            return output

        self.sink.append(output)
        return ""
