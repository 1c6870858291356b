from kitchen.normalize import normalize_email, normalize_title, to_ingredient_list, to_instruction_list


def test_instruction_text_is_split_and_blank_lines_dropped():
    assert to_instruction_list("Step1\nStep2\n\n") == ["Step1", "Step2"]
    assert to_instruction_list("  \nOnly step\n   ") == ["Only step"]


def test_instruction_list_is_kept_in_order():
    steps = ["b", "a", "c"]
    assert to_instruction_list(steps) == ["b", "a", "c"]
    assert to_instruction_list(("x", "y")) == ["x", "y"]


def test_instruction_other_values_become_empty():
    assert to_instruction_list(None) == []
    assert to_instruction_list(42) == []
    assert to_instruction_list("") == []


def test_ingredient_mapping_drops_keys():
    assert to_ingredient_list({"a": "1 egg", "b": "milk"}) == ["1 egg", "milk"]
    assert to_ingredient_list(["flour", {"name": "salt", "qty": 1}]) == [
        "flour",
        {"name": "salt", "qty": 1},
    ]
    assert to_ingredient_list(None) == []


def test_normalize_title():
    assert normalize_title("  Tomato SOUP ") == "tomato soup"
    assert normalize_title("") == ""
    assert normalize_title(None) == ""


def test_normalize_title_casefolds_non_ascii():
    assert normalize_title("CRÈME BRÛLÉE") == normalize_title("crème brûlée")
    assert normalize_title("Émile") == "émile"
    assert normalize_title("Straße") == "strasse"


def test_normalize_email():
    assert normalize_email(" Bob@Example.COM ") == "bob@example.com"
    assert normalize_email("") == ""
    assert normalize_email(None) == ""
