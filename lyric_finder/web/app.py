"""
Web application for Lyric-Finder

A small aiohttp application around the lyrics pipeline:

    GET  /          search form
    GET  /about     about page
    POST /lyrics    look up lyrics for the submitted "song" field
    GET  /health    liveness check, {"ok": true}
    GET  /static/*  stylesheets and scripts

Pages are rendered with jinja2 templates. Every request gets a short request
id; a middleware logs method, path, status and duration, and the lyrics
pipeline logs through a RequestLogAdapter carrying the same id.

One aiohttp ClientSession is opened when the application starts and shared
by the LRCLIB provider for connection pooling; it is closed on cleanup.
"""

import time
from pathlib import Path
from typing import Optional

import aiohttp
import jinja2
from aiohttp import web

from ..config.settings import Settings, get_settings
from ..lyrics.processor import (
    EMPTY_QUERY_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    LyricsProcessor,
    not_found_message
)
from ..utils.helpers import generate_request_id, truncate_string
from ..utils.logger import get_logger, get_request_logger, shutdown_logging

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent / 'templates'
STATIC_DIR = Path(__file__).parent / 'static'

SETTINGS_KEY = web.AppKey('settings', Settings)
TEMPLATES_KEY = web.AppKey('templates', jinja2.Environment)
PROCESSOR_KEY = web.AppKey('processor', LyricsProcessor)
REQUEST_ID_KEY = web.RequestKey('request_id', str)


def create_template_environment() -> jinja2.Environment:
    """Create the jinja2 environment for the page templates"""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=jinja2.select_autoescape(['html']),
        trim_blocks=True,
        lstrip_blocks=True
    )


def render(request: web.Request, template_name: str, status: int = 200, **context) -> web.Response:
    """
    Render a template into an HTML response

    Args:
        request: Current request
        template_name: Template file name under templates/
        status: HTTP status code
        **context: Template variables

    Returns:
        HTML response
    """
    template = request.app[TEMPLATES_KEY].get_template(template_name)
    html = template.render(app_name=request.app[SETTINGS_KEY].server.app_name, **context)
    return web.Response(text=html, content_type='text/html', status=status)


@web.middleware
async def request_logging_middleware(request: web.Request, handler):
    """Assign a request id and log every request with status and duration"""
    request[REQUEST_ID_KEY] = generate_request_id()
    start_time = time.perf_counter()
    status = 500

    try:
        response = await handler(request)
        status = response.status
        return response
    except web.HTTPException as e:
        status = e.status
        raise
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"[req] {request.method} {request.path_qs} -> {status} ({duration_ms:.1f} ms)")


async def index(request: web.Request) -> web.Response:
    return render(request, 'index.html', lyrics=None, error=None, query='')


async def about(request: web.Request) -> web.Response:
    return render(request, 'about.html')


async def health(request: web.Request) -> web.Response:
    return web.json_response({'ok': True})


async def lyrics(request: web.Request) -> web.Response:
    """
    Handle the search form

    The raw query is trimmed and validated here; the pipeline receives only
    non-empty queries. Every outcome renders the index page: lyrics, a
    "not found" message naming the query, or a generic error.
    """
    log = get_request_logger(__name__, request[REQUEST_ID_KEY])
    song_query = ''

    try:
        form = await request.post()
        song_query = str(form.get('song') or '').strip()
        log.info(f"incoming query: {truncate_string(song_query, 200)}")

        if not song_query:
            return render(request, 'index.html', lyrics=None, error=EMPTY_QUERY_MESSAGE, query='')

        result = await request.app[PROCESSOR_KEY].find_lyrics(song_query, logger=log)

        if result.error:
            return render(request, 'index.html', lyrics=None, error=result.error, query=song_query)

        if not result.found:
            return render(
                request, 'index.html',
                lyrics=None, error=not_found_message(song_query), query=song_query
            )

        return render(
            request, 'index.html',
            lyrics=result.text, error=None, query=song_query,
            provider=result.provider_label
        )

    except Exception as e:
        log.exception(f"unhandled error: {e}")
        return render(request, 'index.html', lyrics=None, error=GENERIC_ERROR_MESSAGE, query=song_query)


async def lyrics_processor_ctx(app: web.Application):
    """
    Open the shared HTTP session and the lyrics processor for the app lifetime

    A processor injected through create_app is used as is and not closed here.
    """
    if PROCESSOR_KEY in app:
        yield
        return

    settings = app[SETTINGS_KEY]
    session = aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.lyrics.timeout),
        headers={'User-Agent': settings.lyrics.user_agent}
    )
    processor = LyricsProcessor(session=session)
    app[PROCESSOR_KEY] = processor

    try:
        yield
    finally:
        await processor.close()
        await session.close()


async def on_shutdown(app: web.Application) -> None:
    logger.info("Shutting down...")


def create_app(
    settings: Optional[Settings] = None,
    processor: Optional[LyricsProcessor] = None
) -> web.Application:
    """
    Build the aiohttp application

    Args:
        settings: Settings to use, defaults to the global settings
        processor: Lyrics processor to use; when None one is created at startup
                   with a shared HTTP session

    Returns:
        Configured web.Application
    """
    app = web.Application(middlewares=[request_logging_middleware])
    app[SETTINGS_KEY] = settings or get_settings()
    app[TEMPLATES_KEY] = create_template_environment()
    if processor is not None:
        app[PROCESSOR_KEY] = processor

    app.router.add_get('/', index)
    app.router.add_get('/about', about)
    app.router.add_post('/lyrics', lyrics)
    app.router.add_get('/health', health)
    app.router.add_static('/static', str(STATIC_DIR), name='static')

    app.cleanup_ctx.append(lyrics_processor_ctx)
    app.on_shutdown.append(on_shutdown)

    return app


def run_server(settings: Optional[Settings] = None, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """
    Run the web application until interrupted

    SIGINT and SIGTERM stop the server gracefully (handled by aiohttp).

    Args:
        settings: Settings to use, defaults to the global settings
        host: Bind address override
        port: Port override
    """
    settings = settings or get_settings()
    host = host or settings.server.host
    port = port or settings.server.port

    logger.info(f"{settings.server.app_name} listening on http://{host}:{port}")
    try:
        web.run_app(create_app(settings), host=host, port=port, print=None, access_log=None)
    finally:
        shutdown_logging()
