import pytest

from opensub.cli import parse_args


def test_parse_args_joins_query_words():
    args = parse_args(["brooklyn", "nine", "nine"])

    assert args.query == "brooklyn nine nine"
    assert args.number is None
    assert args.language is None
    assert args.config == "config.yaml"


def test_parse_args_number_and_language():
    args = parse_args(["-n", "7", "8", "-l", "ger", "brooklyn"])

    assert args.number == [7, 8]
    assert args.language == "ger"


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["matrix", "-n", "7"],
        ["matrix", "-n", "seven", "8"],
        ["matrix", "--limit", "0"],
    ],
)
def test_parse_args_usage_errors(argv, capsys):
    with pytest.raises(SystemExit) as exc_info:
        parse_args(argv)

    assert exc_info.value.code == 2
