"""URL placeholder substitution tests."""

import pytest

from src.notify import MissingParamError, ParseError, substitute


def test_substitutes_and_encodes():
    url = substitute("ntfy://host/{topic}?x={v}", {"topic": "alerts", "v": "a b"})
    assert url == "ntfy://host/alerts?x=a%20b"


def test_reserved_characters_are_encoded():
    assert substitute("x://h/{p}", {"p": "a/b&c=d"}) == "x://h/a%2Fb%26c%3Dd"


def test_unreserved_marks_are_kept():
    assert substitute("x://h/{p}", {"p": "a-b_c.d!e~f*g'h(i)"}) == "x://h/a-b_c.d!e~f*g'h(i)"


def test_same_placeholder_used_twice():
    assert substitute("x://{id}/{id}", {"id": "7"}) == "x://7/7"


def test_url_without_placeholders_is_unchanged():
    assert substitute("ntfy://ntfy.sh/topic") == "ntfy://ntfy.sh/topic"
    assert substitute("ntfy://ntfy.sh/topic", {"unused": "x"}) == "ntfy://ntfy.sh/topic"


def test_missing_param_raises():
    with pytest.raises(MissingParamError) as exc_info:
        substitute("ntfy://host/{topic}", {})
    assert exc_info.value.key == "topic"
    assert str(exc_info.value) == "Missing param 'topic' for URL placeholder"
    assert isinstance(exc_info.value, ParseError)


def test_missing_param_without_params():
    with pytest.raises(MissingParamError):
        substitute("ntfy://host/{topic}")


def test_substituted_values_are_not_rescanned():
    assert substitute("x://h/{a}", {"a": "{b}"}) == "x://h/%7Bb%7D"
