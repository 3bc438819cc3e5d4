from org_graph.services.name_abbreviation import get_name_abbreviation


def test_two_tokens():
    assert get_name_abbreviation("Jane Doe") == "JD"


def test_single_token_has_no_second_letter():
    assert get_name_abbreviation("Madonna") == "M"


def test_only_first_two_tokens_used():
    assert get_name_abbreviation("Mary Ann Evans") == "MA"


def test_empty_first_token_uses_placeholder():
    assert get_name_abbreviation(" Doe") == "?D"


def test_double_space_leaves_second_letter_empty():
    assert get_name_abbreviation("Jane  Doe") == "J"


def test_empty_string_is_absent():
    assert get_name_abbreviation("") is None


def test_none_is_absent():
    assert get_name_abbreviation(None) is None
