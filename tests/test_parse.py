import pytest

from dotenvy.errors import LineParseError
from dotenvy.parse import parse_line, parse_value

_NAMES = [
    "KEY", "KEY1", "KEY2", "KEY3", "KEY4", "KEY5", "KEY6", "KEY7", "KEY8",
    "KEY9", "KEY10", "KEY11", "KEY1_1", "KEY_U", "ZZZ", "SHELL_LOVER",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _NAMES:
        monkeypatch.delenv(name, raising=False)


def parse_all(text):
    data = {}
    results = []
    for line in text.splitlines():
        parsed = parse_line(line, data)
        if parsed is not None:
            results.append(parsed)
    return results


def test_parse_line_env():
    text = (
        "\n"
        "KEY=1\n"
        'KEY2="2"\n'
        "KEY3='3'\n"
        "KEY4='fo ur'\n"
        'KEY5="fi ve"\n'
        "KEY6=s\\ ix\n"
        "KEY7=\n"
        "KEY8=     \n"
        "KEY9=   # foo\n"
        'KEY10  ="whitespace before ="\n'
        'KEY11=    "whitespace after ="\n'
        'export="export as key"\n'
        "export   SHELL_LOVER=1\n"
    )
    assert parse_all(text) == [
        ("KEY", "1"),
        ("KEY2", "2"),
        ("KEY3", "3"),
        ("KEY4", "fo ur"),
        ("KEY5", "fi ve"),
        ("KEY6", "s ix"),
        ("KEY7", ""),
        ("KEY8", ""),
        ("KEY9", ""),
        ("KEY10", "whitespace before ="),
        ("KEY11", "whitespace after ="),
        ("export", "export as key"),
        ("SHELL_LOVER", "1"),
    ]


def test_parse_line_comment():
    assert parse_all("\n# foo=bar\n#    ") == []


def test_comment_line_leaves_substitution_data_untouched():
    data = {"A": "1"}
    assert parse_line("   # A=2", data) is None
    assert data == {"A": "1"}


@pytest.mark.parametrize(
    "line", ["  invalid    ", "very bacon = yes indeed", "=value"]
)
def test_parse_line_invalid(line):
    with pytest.raises(LineParseError):
        parse_line(line, {})


def test_parse_value_escapes():
    text = (
        "\n"
        "KEY=my\\ cool\\ value\n"
        "KEY2=\\$sweet\n"
        'KEY3="awesome stuff \\"mang\\""\n'
        "KEY4='sweet $\\fgs'\\''fds'\n"
        "KEY5=\"'\\\"yay\\\\\"\\ \"stuff\"\n"
        'KEY6="lol" #well you see when I say lol wh\n'
        'KEY7="line 1\\nline 2"\n'
    )
    assert parse_all(text) == [
        ("KEY", "my cool value"),
        ("KEY2", "$sweet"),
        ("KEY3", 'awesome stuff "mang"'),
        ("KEY4", "sweet $\\fgs'fds"),
        ("KEY5", "'\"yay\\ stuff"),
        ("KEY6", "lol"),
        ("KEY7", "line 1\nline 2"),
    ]


@pytest.mark.parametrize(
    "line",
    ["KEY=my uncool value", 'KEY2="why', "KEY3='please stop''", "KEY4=h\\8u"],
)
def test_parse_value_escapes_invalid(line):
    with pytest.raises(LineParseError):
        parse_line(line, {})


def test_parse_line_records_substitution_data():
    data = {}
    assert parse_line("A=hello", data) == ("A", "hello")
    assert parse_line("B=", data) == ("B", "")
    assert data == {"A": "hello", "B": None}


def test_parse_value_uses_substitution_data():
    assert parse_value("a$B-c", {"B": "x"}) == "ax-c"
    assert parse_value("${B}", {"B": None}) == ""


def test_variable_in_parenthesis_surrounded_by_quotes():
    text = '\n            KEY=test\n            KEY1="${KEY}"\n            '
    assert parse_all(text) == [("KEY", "test"), ("KEY1", "test")]


def test_substitute_undefined_variables_to_empty_string():
    assert parse_all('KEY=">$KEY1<>${KEY2}<"') == [("KEY", "><><")]


def test_do_not_substitute_variables_with_dollar_escaped():
    assert parse_all("KEY=>\\$KEY1<>\\${KEY2}<") == [("KEY", ">$KEY1<>${KEY2}<")]


def test_do_not_substitute_variables_in_weak_quotes_with_dollar_escaped():
    assert parse_all('KEY=">\\$KEY1<>\\${KEY2}<"') == [
        ("KEY", ">$KEY1<>${KEY2}<")
    ]


def test_do_not_substitute_variables_in_strong_quotes():
    assert parse_all("KEY='>${KEY1}<>$KEY2<'") == [("KEY", ">${KEY1}<>$KEY2<")]


def test_same_variable_reused():
    text = "\n    KEY=VALUE\n    KEY1=$KEY$KEY\n    "
    assert parse_all(text) == [("KEY", "VALUE"), ("KEY1", "VALUEVALUE")]


def test_with_dot():
    assert parse_all("\n    KEY.Value=VALUE\n    ") == [("KEY.Value", "VALUE")]


def test_recursive_substitution():
    text = (
        "\n            KEY=${KEY1}+KEY_VALUE"
        "\n            KEY1=${KEY}+KEY1_VALUE\n            "
    )
    assert parse_all(text) == [
        ("KEY", "+KEY_VALUE"),
        ("KEY1", "+KEY_VALUE+KEY1_VALUE"),
    ]


def test_variable_without_parenthesis_is_substituted_before_separators():
    text = (
        "\n            KEY1=test_user"
        "\n            KEY1_1=test_user_with_separator"
        '\n            KEY=">$KEY1_1<>$KEY1}<>$KEY1{<"\n            '
    )
    assert parse_all(text) == [
        ("KEY1", "test_user"),
        ("KEY1_1", "test_user_with_separator"),
        ("KEY", ">test_user_1<>test_user}<>test_user{<"),
    ]


def test_substitute_variable_from_env_variable(monkeypatch):
    monkeypatch.setenv("KEY11", "test_user_env")
    assert parse_all('KEY=">${KEY11}<"') == [("KEY", ">test_user_env<")]


def test_env_variable_overrides_dotenv_in_substitution(monkeypatch):
    monkeypatch.setenv("KEY11", "test_user_env")
    text = '\n    KEY11=test_user\n    KEY=">${KEY11}<"\n    '
    assert parse_all(text) == [
        ("KEY11", "test_user"),
        ("KEY", ">test_user_env<"),
    ]


def test_consequent_substitutions():
    text = (
        "\n    KEY1=test_user\n    KEY2=$KEY1_2"
        "\n    KEY=>${KEY1}<>${KEY2}<\n    "
    )
    assert parse_all(text) == [
        ("KEY1", "test_user"),
        ("KEY2", "test_user_2"),
        ("KEY", ">test_user<>test_user_2<"),
    ]


def test_consequent_substitutions_with_one_missing():
    text = "\n    KEY2=$KEY1_2\n    KEY=>${KEY1}<>${KEY2}<\n    "
    assert parse_all(text) == [("KEY2", "_2"), ("KEY", "><>_2<")]


def test_should_not_parse_unfinished_substitutions():
    wrong_value = ">${KEY{<"
    data = {}
    assert parse_line("    KEY=VALUE", data) == ("KEY", "VALUE")
    with pytest.raises(LineParseError) as info:
        parse_line(f"    KEY1={wrong_value}", data)
    assert info.value.line == wrong_value
    assert info.value.index == len(wrong_value) - 1


def test_should_not_allow_dot_as_first_character_of_key():
    wrong_key_value = ".Key=VALUE"
    with pytest.raises(LineParseError) as info:
        parse_line(wrong_key_value, {})
    assert info.value.line == wrong_key_value
    assert info.value.index == 0


def test_should_not_parse_illegal_format():
    wrong_format = "<><><>"
    with pytest.raises(LineParseError) as info:
        parse_line(wrong_format, {})
    assert info.value.line == wrong_format
    assert info.value.index == 0


def test_should_not_parse_illegal_escape():
    wrong_escape = ">\\f<"
    with pytest.raises(LineParseError) as info:
        parse_line(f"VALUE={wrong_escape}", {})
    assert info.value.line == wrong_escape
    assert info.value.index == wrong_escape.index("\\") + 1


def test_missing_equals_reports_position_after_key():
    with pytest.raises(LineParseError) as info:
        parse_line("  KEY value", {})
    assert info.value.line == "  KEY value"
    assert info.value.index == 6