import pytest

from biography_parser import parse, parse_all
from errors import ParseError, ParseErrorKind
from models import RawRow


def _row(text: str, index: int = 0) -> RawRow:
    return RawRow(text=text, row_index=index)


def test_parse_deceased_life_span() -> None:
    parsed = parse(_row("Jane Doe(1900–1980)Some District"))

    assert parsed.name == "Jane Doe"
    assert parsed.life_span_text == "1900–1980"
    assert parsed.born_text is None


def test_parse_living_born_marker() -> None:
    parsed = parse(_row("John Smith(b. 1950)Some District"))

    assert parsed.name == "John Smith"
    assert parsed.born_text == "b. 1950"
    assert parsed.life_span_text is None


def test_parse_keeps_provenance() -> None:
    row = _row("Jane Doe(1900–1980)X", index=7)
    assert parse(row).source == row


@pytest.mark.parametrize("text, expected", [
    ("Jane Doe (1900 – 1980) Some District", "1900 – 1980"),
    ("Jane Doe(1900–1980)MP for Phulpur (1952–1964)", "1900–1980"),
    ("Jane Doe[a](1900–1980)", "1900–1980"),
])
def test_parse_life_span_variants(text: str, expected: str) -> None:
    parsed = parse(_row(text))
    assert parsed.name == "Jane Doe"
    assert parsed.life_span_text == expected


def test_parse_born_marker_with_non_breaking_space() -> None:
    parsed = parse(_row("John Smith(b.\u00a01950)Varanasi"))
    assert parsed.born_text == "b.\u00a01950"


def test_parse_ascii_hyphen_is_not_a_life_span() -> None:
    """Only the en dash separates birth and death years."""
    with pytest.raises(ParseError) as excinfo:
        parse(_row("Jane Doe(1900-1980)Some District"))

    assert excinfo.value.kind is ParseErrorKind.UNRECOGNIZED_FORMAT


def test_parse_unrecognized_format_carries_raw_text() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(_row("Broken Entry no years here"))

    assert excinfo.value.kind is ParseErrorKind.UNRECOGNIZED_FORMAT
    assert excinfo.value.raw_text == "Broken Entry no years here"


@pytest.mark.parametrize("text", [
    "Jane Doe(19000–1980)",   # five-digit year
    "Jane Doe(b.1950)",       # no whitespace after marker
    "Jane Doe(Jacob. 1950)",  # "b." at the end of a word
    "Jane Doe(born 1950)",
])
def test_parse_rejects_near_misses(text: str) -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(_row(text))
    assert excinfo.value.kind is ParseErrorKind.UNRECOGNIZED_FORMAT


def test_parse_missing_name() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse(_row("  (1900–1980)Some District"))

    assert excinfo.value.kind is ParseErrorKind.MISSING_NAME


def test_parse_prefers_life_span_when_both_shapes_present() -> None:
    parsed = parse(_row("Jane Doe(b. 1900)(1900–1980)"))

    assert parsed.life_span_text == "1900–1980"
    assert parsed.born_text is None


def test_parse_all_collects_failures_and_continues() -> None:
    rows = [
        _row("Jane Doe(1900–1980)X", 0),
        _row("Broken Entry no years here", 1),
        _row("(b. 1950)", 2),
        _row("John Smith(b. 1950)Y", 3),
    ]

    parsed, skipped = parse_all(rows)

    assert [p.name for p in parsed] == ["Jane Doe", "John Smith"]
    assert [(s.row.row_index, s.reason) for s in skipped] == [
        (1, "unrecognized_format"),
        (2, "missing_name"),
    ]
