from domain.allergens import ALLERGENS, FALLBACK_MARKER, icon_for, is_recognized, unrecognized


def test_vocabulary_has_fourteen_allergens():
    assert len(ALLERGENS) == 14
    assert len(set(ALLERGENS)) == 14


def test_every_allergen_has_an_icon():
    for name in ALLERGENS:
        assert icon_for(name) != FALLBACK_MARKER


def test_legacy_shellfish_label_shares_crustacean_icon():
    assert icon_for("Mariscos") == icon_for("Crustáceos")
    assert not is_recognized("Mariscos")


def test_unknown_name_gets_fallback_marker():
    assert icon_for("Kiwi") == FALLBACK_MARKER


def test_unrecognized_keeps_input_order():
    assert unrecognized(["Kiwi", "Gluten", "Fresas"]) == ["Kiwi", "Fresas"]
