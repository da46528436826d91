import pytest

from gofire.control.recipes import RECIPES, find_recipe
from gofire.hardware.outputs import Line

CH1, CH2, CH3 = Line.CH1, Line.CH2, Line.CH3


@pytest.mark.parametrize(
    "name, expected",
    [
        (
            "off",
            [
                ("set", CH1, 0), ("set", CH2, 0), ("set", CH3, 0),
                ("hold", 1.0),
                ("set", CH1, 1), ("set", CH2, 1), ("set", CH3, 1),
            ],
        ),
        (
            "on",
            [
                ("set", CH1, 0), ("set", CH2, 1), ("set", CH3, 0),
                ("hold", 1.0),
                ("set", CH1, 1), ("set", CH3, 1),
            ],
        ),
        (
            "flameup",
            [
                ("set", CH1, 0), ("set", CH2, 1), ("set", CH3, 1),
                ("hold", 2.0),
                ("set", CH1, 1),
            ],
        ),
        (
            "flamedown",
            [
                ("set", CH1, 1), ("set", CH2, 1), ("set", CH3, 0),
                ("hold", 2.0),
                ("set", CH3, 1),
            ],
        ),
    ],
)
def test_recipe_produces_exact_pulse_sequence(sequencer, events, name, expected):
    outcome = sequencer.try_run(name)

    assert outcome.ok
    assert outcome.token == f"{name}_ok"
    assert events == expected


def test_on_leaves_ch2_alone_in_last_step(sequencer, driver):
    driver.values[Line.CH2] = 0

    sequencer.try_run("on")

    # "on" opens CH2 in its first step and never touches it again.
    assert driver.values == {CH1: 1, CH2: 1, CH3: 1}


def test_every_recipe_ends_with_zero_hold():
    for recipe in RECIPES.values():
        assert recipe.steps[-1].hold == 0
        assert recipe.steps[0].hold in (1.0, 2.0)


def test_find_recipe_unknown():
    with pytest.raises(KeyError):
        find_recipe("explode")
    assert find_recipe("flameup").name == "flameup"
