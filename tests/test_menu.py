from itertools import combinations

import pytest

from complx.errors import InvalidInputError
from complx.menu import MenuOptimizer, ReadyMenuOptimizer
from complx.models import Dish

BASE_MENU = [
    Dish("Chicken", 300),
    Dish("Salad", 200),
    Dish("Soup", 150),
    Dish("WaterMelon", 80),
    Dish("Apple", 70),
    Dish("Fish", 400),
]


def _brute_force_overshoot(target: int, menu: list[Dish]) -> int | None:
    best = None
    for size in range(len(menu) + 1):
        for subset in combinations(menu, size):
            total = sum(d.calories for d in subset)
            if total >= target and (best is None or total - target < best):
                best = total - target
    return best


def test_optimal_menu_is_found_with_coherent_target_calories():
    mor = MenuOptimizer().find_optimal_menu(1000, BASE_MENU)

    assert isinstance(mor, ReadyMenuOptimizer)
    assert mor.best_menu == (
        Dish("Chicken", 300),
        Dish("Soup", 150),
        Dish("WaterMelon", 80),
        Dish("Apple", 70),
        Dish("Fish", 400),
    )
    assert mor.best_overshoot == 0
    assert mor.total_calories == 1000


def test_optimal_menu_is_not_found_with_unbalanced_target_calories():
    mor = MenuOptimizer().find_optimal_menu(9999, BASE_MENU)

    assert mor.best_menu is None
    assert mor.best_overshoot is None
    assert mor.total_calories is None
    assert "not possible" in mor.report()


def test_zero_target_picks_empty_menu():
    mor = MenuOptimizer().find_optimal_menu(0, BASE_MENU)

    assert mor.best_menu == ()
    assert mor.best_overshoot == 0


def test_empty_base_menu():
    assert MenuOptimizer().find_optimal_menu(0, []).best_menu == ()
    assert MenuOptimizer().find_optimal_menu(10, []).best_menu is None


def test_first_menu_wins_ties():
    menu = [Dish("A", 50), Dish("B", 50), Dish("C", 100)]
    mor = MenuOptimizer().find_optimal_menu(100, menu)

    assert mor.best_menu == (Dish("A", 50), Dish("B", 50))


def test_overshoot_when_no_exact_match():
    menu = [Dish("A", 70), Dish("B", 45), Dish("C", 40)]
    mor = MenuOptimizer().find_optimal_menu(100, menu)

    assert mor.best_overshoot == 10
    assert mor.best_menu == (Dish("A", 70), Dish("C", 40))


@pytest.mark.parametrize("target", [0, 1, 149, 333, 570, 999, 1001, 1200, 1600])
def test_matches_brute_force(target):
    mor = MenuOptimizer().find_optimal_menu(target, BASE_MENU)
    expected = _brute_force_overshoot(target, BASE_MENU)

    assert mor.best_overshoot == expected
    if mor.best_menu is not None:
        assert mor.total_calories - target == expected


def test_optimizer_can_be_searched_again():
    optimizer = MenuOptimizer()
    first = optimizer.find_optimal_menu(9999, BASE_MENU)
    second = optimizer.find_optimal_menu(200, BASE_MENU)

    assert first.best_menu is None
    assert second.best_overshoot == 0


def test_report_lists_dishes_and_total():
    mor = MenuOptimizer().find_optimal_menu(1000, BASE_MENU)
    text = mor.report()

    assert text.startswith("> Optimal menu found:")
    assert "  1: Chicken -> 300 calories" in text
    assert "#> Total calories: 1000" in text
    assert text == mor.report()


def test_negative_values_are_rejected():
    with pytest.raises(InvalidInputError):
        MenuOptimizer().find_optimal_menu(-1, BASE_MENU)
    with pytest.raises(InvalidInputError):
        MenuOptimizer().find_optimal_menu(10, [Dish("Ghost", -5)])
