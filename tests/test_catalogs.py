from decimal import Decimal
from pathlib import Path

from cafe_pos.menu import MenuCatalog
from cafe_pos.recipes import RecipeCatalog


def _make_recipes(tmp_path: Path, body: str | None = None) -> RecipeCatalog:
    path = tmp_path / "recipes.txt"
    if body is not None:
        path.write_text(body, encoding="utf-8")
    catalog = RecipeCatalog(path)
    catalog.load()
    return catalog


def _make_menu(tmp_path: Path, body: str | None = None) -> MenuCatalog:
    path = tmp_path / "menu.txt"
    if body is not None:
        path.write_text(body, encoding="utf-8")
    catalog = MenuCatalog(path)
    catalog.load()
    return catalog


def test_recipes_seed_defaults_matching_menu(tmp_path: Path) -> None:
    recipes = _make_recipes(tmp_path)
    menu = _make_menu(tmp_path)

    assert len(recipes) == 12
    assert set(recipes) == set(menu.names())
    assert recipes["Hot Coffee"] == {"Coffee Beans": 15, "Cups": 1, "Lids": 1}
    assert "Hot Coffee|Coffee Beans=15;Cups=1;Lids=1" in (tmp_path / "recipes.txt").read_text(encoding="utf-8")


def test_recipe_records_parse_permissively(tmp_path: Path) -> None:
    recipes = _make_recipes(
        tmp_path,
        body="Water|\nTea|Tea Leaves=5;Cups=one;Sugar=0;Lids=1;junk\nno separator here\nA|B|C\n",
    )

    assert recipes.get("Water") == {}
    assert recipes["Tea"] == {"Tea Leaves": 5, "Lids": 1}
    assert "A" not in recipes
    assert recipes.skipped_lines == 2


def test_recipe_set_and_remove_rewrite_the_file(tmp_path: Path) -> None:
    recipes = _make_recipes(tmp_path, body="Water|\n")

    assert recipes.set("Affogato", {"Coffee Beans": 18, "Ice Cream": 1}) is True
    assert recipes.set("Bad", {"Milk": 0}) is False
    assert recipes.set("Semi;colon", {"Milk|Cream": 1}) is False
    assert _make_recipes(tmp_path)["Affogato"] == {"Coffee Beans": 18, "Ice Cream": 1}

    assert recipes.remove("Water") is True
    assert recipes.remove("Water") is False
    assert (tmp_path / "recipes.txt").read_text(encoding="utf-8") == "Affogato|Coffee Beans=18;Ice Cream=1\n"


def test_menu_seeds_twelve_priced_drinks(tmp_path: Path) -> None:
    menu = _make_menu(tmp_path)

    assert len(menu.items()) == 12
    assert menu.price_of("Hot Coffee") == Decimal("90")
    assert menu.price_of("Brown Sugar Latte") == Decimal("140")


def test_menu_crud(tmp_path: Path) -> None:
    menu = _make_menu(tmp_path, body="Hot Coffee|90\nbroken\nTea|free\nJuice|-5\n")
    assert menu.names() == ["Hot Coffee"]
    assert menu.skipped_lines == 3

    assert menu.add("Tea", Decimal("60.50")) is True
    assert menu.add("Tea", Decimal("70")) is False
    assert menu.add("Free", Decimal("0")) is False
    assert menu.set_price("Tea", Decimal("65")) is True
    assert menu.set_price("Juice", Decimal("65")) is False
    assert menu.remove("Hot Coffee") is True
    assert menu.remove("Hot Coffee") is False

    assert _make_menu(tmp_path).items() == [("Tea", Decimal("65"))]


def test_undecodable_catalog_lines_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "recipes.txt").write_bytes(b"Water|\nTe\xff|Leaves=5\n")
    (tmp_path / "menu.txt").write_bytes(b"Water|35\nLat\xfete|120\n")

    recipes = _make_recipes(tmp_path)
    menu = _make_menu(tmp_path)

    assert list(recipes) == ["Water"]
    assert recipes.skipped_lines == 1
    assert menu.names() == ["Water"]
    assert menu.skipped_lines == 1
