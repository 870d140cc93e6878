import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from databases import Database
from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, RedirectResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from app import config
from app.html.meal_card import MealCard
from menu.models import Category, MealSlot
from menu.repository import CatalogRepository, DatabaseStore, HistoryRepository, Store
from menu.services import refresh_day, refresh_meal, save_catalog, today_menu


CONFIG = config.Config()


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def templates(request: Request) -> Environment:
    return request.app.state.templates


def repositories(request: Request) -> tuple[CatalogRepository, HistoryRepository]:
    return request.app.state.catalogs, request.app.state.histories


@aHTMLResponse
async def homepage(request: Request) -> str:
    catalogs, histories = repositories(request)
    menu = await today_menu(catalogs=catalogs, histories=histories)
    env = templates(request)
    cards = [MealCard(slot, meal, environment=env) for slot, meal in menu.meals()]
    return env.get_template("today.html").render(cards=cards, active="today")


async def refresh(request: Request) -> RedirectResponse:
    catalogs, histories = repositories(request)
    await refresh_day(catalogs=catalogs, histories=histories)
    return RedirectResponse("/", status_code=303)


async def refresh_one(request: Request) -> HTMLResponse | RedirectResponse:
    try:
        slot = MealSlot(request.path_params["meal"])
    except ValueError:
        logger.warning(f"Unknown meal {request.path_params['meal']!r}.")
        return HTMLResponse("Unknown meal.", status_code=404)
    catalogs, histories = repositories(request)
    await refresh_meal(slot, catalogs=catalogs, histories=histories)
    return RedirectResponse("/", status_code=303)


async def admin(request: Request) -> HTMLResponse | RedirectResponse:
    catalogs, _ = repositories(request)
    match request.method.lower():
        case "get":
            catalog = await catalogs.load()
            fields = [(c, catalog.as_text(c)) for c in Category]
            return HTMLResponse(
                templates(request)
                .get_template("admin.html")
                .render(fields=fields, active="admin")
            )
        case "post":
            async with request.form() as form:
                texts = {
                    c: str(form[c.value]) for c in Category if c.value in form
                }
            await save_catalog(texts, catalogs=catalogs)
            return RedirectResponse("/admin", status_code=303)
        case _:
            raise ValueError("Unsupported method.")


def create_app(cfg: config.Config | None = None, *, store: Store | None = None) -> Starlette:
    """App over `store`, or over the configured database when none is given."""
    cfg = CONFIG if cfg is None else cfg
    db_store = DatabaseStore(Database(cfg.db_url)) if store is None else None
    store = db_store if store is None else store
    assert store is not None

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        configure_logging(cfg.log_level)
        if db_store is not None:
            await db_store.db.connect()
            logger.info(f"Connected to {cfg.db_url}.")
            try:
                await db_store.create()
            except Exception:
                logger.exception("Could not create the KeyValues table.")
        yield
        if db_store is not None:
            await db_store.db.disconnect()

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/refresh", refresh, methods=["POST"]),
            Route("/refresh/{meal:str}", refresh_one, methods=["POST"]),
            Route("/admin", admin, methods=["GET", "POST"]),
            Mount("/assets", StaticFiles(directory=cfg.assets_dir, check_dir=False)),
        ],
        lifespan=lifespan,
    )

    app.state.templates = Environment(
        loader=FileSystemLoader(cfg.html_dir),
        autoescape=select_autoescape(),
    )
    app.state.catalogs = CatalogRepository(store)
    app.state.histories = HistoryRepository(store, size=cfg.history_size)
    return app


app = create_app()
