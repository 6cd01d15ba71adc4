"""
FastAPI Web Application - Forms Plugin Admin Panel
===================================================

Reference host for the review prompter: serves plugin admin pages, fires
the admin lifecycle hooks per request, shows queued notices and handles
notice dismissal.
"""

import hmac
import logging
import hashlib
import secrets
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel
from starlette.middleware.sessions import SessionMiddleware

from ..domain import REVIEW_LITE_SLUG, REVIEW_SLUG, AdminContext, DismissScope, ReviewPrompter
from ..infrastructure.config import Settings, get_settings
from ..infrastructure.links import UtmLinkBuilder
from ..infrastructure.notices import NoticeDismissal, NoticeQueue
from ..infrastructure.persistence import (
    Database,
    EntryRepository,
    OptionStore,
    PostCounter,
    PostStatus,
    User,
    UserRole,
    init_database,
)
from .hooks import HookRegistry
from .templates import HtmlTemplateRenderer

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_FOOTER_TEXT = 'Thank you for creating with <a href="https://wordpress.org/">WordPress</a>.'

# ── Globals ────────────────────────────────────────────────────────
db: Optional[Database] = None


PBKDF2_ITERATIONS = 260_000

# Notices the dismiss endpoint accepts.
DISMISSIBLE_SLUGS = frozenset({REVIEW_SLUG, REVIEW_LITE_SLUG})


def hash_password(password: str, salt: Optional[str] = None, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Salted PBKDF2 hash stored as `pbkdf2_sha256$iterations$salt$hex`."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations).hex()
    return f"pbkdf2_sha256${iterations}${salt}${digest}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, _ = stored.split("$", 3)
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256" or not iterations.isdigit():
        return False
    return hmac.compare_digest(hash_password(password, salt, int(iterations)), stored)


def seed_admin(database: Database, settings: Settings) -> None:
    """Create the configured administrator if it does not exist yet."""
    if not settings.admin_password:
        return
    if database.get_user_by_username(settings.admin_username):
        return
    database.create_user(
        settings.admin_username,
        hash_password(settings.admin_password),
        role=UserRole.SUPER_ADMIN.value,
    )
    logger.info(f"Seeded administrator '{settings.admin_username}'")


# ── Lifespan ───────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    global db
    settings = get_settings()
    for issue in settings.validate():
        logger.warning(issue)

    db = init_database(str(settings.database_file))
    seed_admin(db, settings)
    logger.info("Database ready")
    yield


app = FastAPI(title="Review Prompter", description="Forms plugin admin panel", lifespan=lifespan)

# Signed session cookie; the user id is never trusted from a plain cookie.
app.add_middleware(SessionMiddleware, secret_key=get_settings().session_secret)


# ══════════════════════════════════════════════════════════════════
#  API MODELS
# ══════════════════════════════════════════════════════════════════

class SettingsUpdate(BaseModel):
    hide_announcements: Optional[bool] = None
    constant_contact: Optional[bool] = None


class FormCreate(BaseModel):
    title: str
    status: str = PostStatus.PUBLISH.value


# ══════════════════════════════════════════════════════════════════
#  REQUEST BOOTSTRAP
# ══════════════════════════════════════════════════════════════════

def screen_id_for(page: str, settings: Settings) -> str:
    """Admin screen identifier for a `page` query parameter."""
    if not page:
        return "dashboard"
    if page == settings.plugin.page("overview"):
        return f"toplevel_page_{page}"
    if page.startswith(f"{settings.plugin.namespace}-"):
        return f"{settings.plugin.namespace}_page_{page}"
    return f"admin_page_{page}"


def build_context(user: User, page: str, settings: Settings) -> AdminContext:
    return AdminContext(
        is_super_admin=user.is_super_admin,
        screen_id=screen_id_for(page, settings),
        page=page,
        user_id=user.id,
    )


def bootstrap_admin(user: User, page: str, settings: Settings):
    """
    Wire a fresh prompter into a fresh hook registry for this request.

    Returns (hooks, notice queue, template renderer, context).
    """
    store = OptionStore(db)
    renderer = HtmlTemplateRenderer()
    queue = NoticeQueue(store, settings.plugin.option("admin_notices"), user_id=user.id)

    prompter = ReviewPrompter(
        store=store,
        notices=queue,
        templates=renderer,
        links=UtmLinkBuilder(is_pro=settings.plugin.is_pro, locale=settings.plugin.locale),
        forms=PostCounter(db),
        settings=settings,
        entries=EntryRepository(db) if settings.plugin.is_pro else None,
    )

    hooks = HookRegistry()
    prompter.register_hooks(hooks)

    return hooks, queue, renderer, build_context(user, page, settings)


def page_title(page: str, settings: Settings) -> str:
    if not page:
        return "Dashboard"
    prefix = f"{settings.plugin.namespace}-"
    name = page[len(prefix):] if page.startswith(prefix) else page
    return f"{settings.plugin.name} {name.replace('-', ' ').title()}"


# ── Auth helpers ───────────────────────────────────────────────

def _get_current_user(request: Request) -> Optional[User]:
    """Get logged-in user from the signed session, or None."""
    uid = request.session.get("user_id")
    if not isinstance(uid, int):
        return None
    return db.get_user_by_id(uid)


def _require_admin(request: Request) -> User:
    user = _get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not logged in")
    if not user.is_super_admin:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return user


# ══════════════════════════════════════════════════════════════════
#  ROUTES
# ══════════════════════════════════════════════════════════════════

@app.get("/login", response_class=HTMLResponse)
async def login_page(message: str = ""):
    return HtmlTemplateRenderer().render("login", {"message": message})


@app.post("/login")
async def login(request: Request, username: str = Form(...), password: str = Form(...)):
    user = db.get_user_by_username(username)
    if not user or not verify_password(password, user.password_hash):
        return HTMLResponse(HtmlTemplateRenderer().render("login", {"message": "Invalid username or password"}))

    settings = get_settings()
    request.session["user_id"] = user.id
    return RedirectResponse(url=f"/admin.php?page={settings.plugin.page('overview')}", status_code=303)


@app.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url="/login", status_code=303)


@app.get("/")
async def index():
    return RedirectResponse(url="/admin.php")


@app.get("/admin.php", response_class=HTMLResponse)
async def admin_page(request: Request, page: str = ""):
    user = _get_current_user(request)
    if not user:
        return RedirectResponse(url="/login")

    settings = get_settings()
    hooks, queue, renderer, context = bootstrap_admin(user, page.strip(), settings)

    hooks.do_action("admin_init", context)
    promotion = "".join(hooks.do_action("in_admin_footer", context))
    footer_text = hooks.apply_filters("admin_footer_text", DEFAULT_FOOTER_TEXT, context)

    return renderer.render(
        "admin/page",
        {
            "title": page_title(context.page, settings),
            "namespace": settings.plugin.namespace,
            "screen_id": context.screen_id,
            "body": f"Signed in as {user.username}.",
            "notices": queue.render(),
            "promotion": promotion,
            "footer_text": footer_text,
        },
    )


@app.post("/notices/{slug}/dismiss")
async def dismiss_notice(request: Request, slug: str):
    user = _require_admin(request)
    if slug not in DISMISSIBLE_SLUGS:
        raise HTTPException(status_code=404, detail="Unknown notice")

    settings = get_settings()
    dismissal = NoticeDismissal(OptionStore(db), settings.plugin.option("admin_notices"))

    if not dismissal.dismiss(slug, DismissScope.GLOBAL, user_id=user.id):
        raise HTTPException(status_code=400, detail="Invalid notice")
    return {"success": True, "slug": slug}


# ── API Endpoints ──────────────────────────────────────────────

@app.get("/api/notices")
async def api_notices(request: Request):
    _require_admin(request)
    settings = get_settings()
    store = OptionStore(db)
    return {
        "notices": store.get(settings.plugin.option("admin_notices"), {}),
        "activated": store.get(settings.plugin.option("activated"), {}),
    }


@app.post("/api/settings")
async def api_update_settings(request: Request, update: SettingsUpdate):
    _require_admin(request)
    settings = get_settings()
    store = OptionStore(db)

    if update.hide_announcements is not None:
        plugin_settings = store.get(settings.plugin.option("settings"), {})
        if not isinstance(plugin_settings, dict):
            plugin_settings = {}
        plugin_settings["hide-announcements"] = update.hide_announcements
        store.set(settings.plugin.option("settings"), plugin_settings)

    if update.constant_contact is not None:
        store.set(settings.plugin.option("constant_contact"), update.constant_contact)

    return {"success": True}


@app.post("/api/forms")
async def api_create_form(request: Request, form: FormCreate):
    _require_admin(request)
    if form.status not in {s.value for s in PostStatus}:
        raise HTTPException(status_code=422, detail=f"Unknown status: {form.status}")

    settings = get_settings()
    form_id = db.add_post(settings.plugin.namespace, form.title, form.status)
    logger.info(f"Form {form_id} created ({form.status})")
    return {"id": form_id}


@app.post("/api/forms/{form_id}/entries")
async def api_add_entry(form_id: int):
    """Public submission endpoint."""
    settings = get_settings()
    form = db.get_post(form_id)
    if not form or form.post_type != settings.plugin.namespace or form.status != PostStatus.PUBLISH.value:
        raise HTTPException(status_code=404, detail="Form not found")
    return {"id": db.add_entry(form_id)}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
