"""HTTP API: site content, blog posts, projects, and the contact endpoint"""

import json
import logging
from typing import Any, List

from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from folio.config import Settings, load_config
from folio.contact.mailer import dispatch, dispatch_in_background
from folio.contact.pipeline import GENERIC_ERROR, handle_submission
from folio.contact.recaptcha import client_ip_from_headers
from folio.content.posts import get_post, list_posts
from folio.content.projects import get_repos, select_repos
from folio.content.site import get_profile, get_site
from folio.content.store import make_data_store, make_posts_store
from folio.core.models import Post, PostSummary, ProfileContent, SiteData
from folio.errors import NotFound, TransientUpstreamFailure


logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    """Build the app; content backends are chosen once here from settings.mode."""
    settings = settings or load_config()
    data_store = make_data_store(settings)
    posts_store = make_posts_store(settings)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.data_store = data_store
    app.state.posts_store = posts_store

    @app.get("/api/site", response_model=SiteData)
    def site():
        try:
            return get_site(data_store)
        except NotFound:
            raise HTTPException(404, "Site data not found")

    @app.get("/api/profile", response_model=ProfileContent)
    def profile():
        try:
            return get_profile(data_store)
        except NotFound:
            raise HTTPException(404, "Profile not found")

    @app.get("/api/posts", response_model=List[PostSummary])
    def posts():
        return list_posts(posts_store)

    @app.get("/api/posts/{slug}", response_model=Post)
    def post(slug: str):
        try:
            return get_post(posts_store, slug)
        except NotFound:
            raise HTTPException(404, "Post not found")

    @app.get("/api/projects")
    def projects():
        try:
            return select_repos(get_repos(settings.github_username))
        except TransientUpstreamFailure as e:
            logger.error("%s", e)
            raise HTTPException(502, "Failed to fetch repos")

    @app.get("/api/config")
    def public_config() -> dict[str, Any]:
        return {
            "recaptchaSiteKey": settings.recaptcha_site_key or None,
            "githubUsername": settings.github_username,
        }

    @app.post("/api/contact")
    async def contact(request: Request, background: BackgroundTasks):
        try:
            raw = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse({"ok": False, "error": GENERIC_ERROR}, status_code=400)

        peer = request.client.host if request.client else None
        client_ip = client_ip_from_headers(request.headers, peer)
        outcome = await run_in_threadpool(handle_submission, raw, client_ip, settings)

        if outcome.dispatch:
            if settings.mail_await_delivery:
                try:
                    await run_in_threadpool(dispatch, outcome.submission, settings)
                except Exception:
                    logger.exception("Contact notification failed for %s", outcome.submission.email)
                    return JSONResponse({"ok": False, "error": "Failed to send message"}, status_code=502)
            else:
                background.add_task(dispatch_in_background, outcome.submission, settings)

        if isinstance(outcome.body, str):
            return PlainTextResponse(outcome.body, status_code=outcome.status)
        return JSONResponse(outcome.body, status_code=outcome.status)

    return app
