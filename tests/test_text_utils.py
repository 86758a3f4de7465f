import pytest

from mela_converter.app.services.conversion.text_utils import (
    TextNormalizer,
    as_text,
    join_lines,
    join_steps,
    split_lines,
    to_proper_case,
    to_title_case,
)


def test_to_proper_case():
    assert to_proper_case("HELLO WORLD") == "Hello world"
    assert to_proper_case("") == ""
    assert to_proper_case(None) == ""


def test_to_title_case_capitalizes_words_and_hyphen_parts():
    assert to_title_case("one-pot chicken and rice") == "One-Pot Chicken And Rice"
    assert to_title_case("15 minute salmon gnocchi") == "15 Minute Salmon Gnocchi"
    assert to_title_case("BBQ ribs") == "BBQ Ribs"


def test_text_normalizer_modes():
    assert TextNormalizer().title("easy PASTA bake") == "Easy PASTA Bake"
    assert TextNormalizer("proper").title("easy PASTA bake") == "Easy pasta bake"
    with pytest.raises(ValueError):
        TextNormalizer("shout")


def test_joins_drop_blank_entries():
    assert join_lines(["1 cup flour", "  ", " 2 eggs "]) == "1 cup flour\n2 eggs"
    assert join_steps(["Mix", "", "Bake"]) == "Mix\n\nBake"


def test_split_lines():
    assert split_lines("A\n\n B \n") == ["A", "B"]
    assert split_lines(["A", None, " "]) == ["A"]
    assert split_lines(None) == []


def test_as_text_flattens_structured_values():
    nutrition = {"@type": "NutritionInformation", "calories": "200 kcal", "fatContent": "5 g"}
    assert as_text(nutrition) == "calories: 200 kcal\nfatContent: 5 g"
    assert as_text(["4", "4 bowls"]) == "4, 4 bowls"
    assert as_text(6) == "6"
    assert as_text(None) == ""
