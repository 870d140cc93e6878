import json
from pathlib import Path

import pytest
from starlette.testclient import TestClient

from app.app import create_app
from app.config import Config, Env
from menu.history import today_key
from menu.models import Category, MealSlot
from menu.repository import CATEGORIES_KEY, HISTORY_KEY, MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def client(store: MemoryStore) -> TestClient:
    return TestClient(create_app(Config(), store=store))


def stored_history(store: MemoryStore) -> list[dict]:
    return json.loads(store.values[HISTORY_KEY])


def test_homepage_creates_today(client: TestClient, store: MemoryStore) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Hôm nay" in resp.text
    for slot in MealSlot:
        assert slot.label in resp.text
    for category in Category:
        assert category.label in resp.text
    history = stored_history(store)
    assert [h["date"] for h in history] == [today_key()]

    again = client.get("/")
    assert again.status_code == 200
    assert stored_history(store) == history


def test_homepage_shows_dashes_for_empty_pool(
    client: TestClient, store: MemoryStore
) -> None:
    store.values[CATEGORIES_KEY] = json.dumps({c.value: [] for c in Category})
    resp = client.get("/")
    assert resp.text.count("—") == 2 * len(Category)


def test_homepage_escapes_dish_names(client: TestClient, store: MemoryStore) -> None:
    store.values[CATEGORIES_KEY] = json.dumps({"meat": ["<b>Gà</b>"]})
    resp = client.get("/")
    assert "&lt;b&gt;Gà&lt;/b&gt;" in resp.text
    assert "<b>Gà</b>" not in resp.text


def test_refresh_day(client: TestClient, store: MemoryStore) -> None:
    client.get("/")
    resp = client.post("/refresh", follow_redirects=False)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"
    assert [h["date"] for h in stored_history(store)] == [today_key()]


@pytest.mark.parametrize("slot", list(MealSlot))
def test_refresh_meal(client: TestClient, store: MemoryStore, slot: MealSlot) -> None:
    client.get("/")
    before = stored_history(store)[0]["menu"]
    resp = client.post(f"/refresh/{slot.value}", follow_redirects=False)
    assert resp.status_code == 303
    after = stored_history(store)[0]["menu"]
    other = MealSlot.dinner if slot == MealSlot.lunch else MealSlot.lunch
    assert after[other.value] == before[other.value]


def test_refresh_unknown_meal(client: TestClient, store: MemoryStore) -> None:
    resp = client.post("/refresh/breakfast")
    assert resp.status_code == 404
    assert HISTORY_KEY not in store.values


def test_admin_lists_dishes(client: TestClient) -> None:
    resp = client.get("/admin")
    assert resp.status_code == 200
    assert "Sườn xào chua ngọt" in resp.text
    for category in Category:
        assert f'name="{category.value}"' in resp.text


def test_admin_save(client: TestClient, store: MemoryStore) -> None:
    resp = client.post(
        "/admin",
        data={"meat": "Gà\n gà \nBò\n\n", "fruit": "Cam"},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin"
    stored = json.loads(store.values[CATEGORIES_KEY])
    assert stored["meat"] == ["Gà", "Bò"]
    assert stored["fruit"] == ["Cam"]
    assert stored["fish"] == ["Cá kho", "Mực luộc", "Cá sốt cà chua"]

    page = client.get("/admin")
    assert "Gà\nBò" in page.text


def test_stylesheet(client: TestClient) -> None:
    resp = client.get("/assets/css/style.css")
    assert resp.status_code == 200


def test_app_over_sqlite(tmp_path: Path) -> None:
    cfg = Config(db_url=f"sqlite+aiosqlite:///{tmp_path / 'menu.db'}")
    with TestClient(create_app(cfg)) as client:
        first = client.get("/")
        assert first.status_code == 200
        assert client.get("/").text == first.text
        resp = client.post("/admin", data={"soup": "Canh chua"})
        assert resp.status_code == 200
        assert "Canh chua" in resp.text


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MENU_ENV", "prod")
    monkeypatch.setenv("MENU_HISTORY_SIZE", "5")
    cfg = Config()
    assert cfg.env == Env.prod
    assert cfg.history_size == 5
    assert not create_app(cfg, store=MemoryStore()).debug
