import pytest

from theshow_insights.ingest.text_utils import (
    clean_batter_name,
    clean_pitcher_name,
    ip_to_outs,
    last_name,
    normalize_name,
    parse_int_safe,
    strip_codes,
    to_iso,
)


class TestStripCodes:
    def test_removes_color_and_bold_codes(self) -> None:
        assert strip_codes("^c5^Smith^e^ ^b12^homered") == "Smith homered"

    def test_newline_code_becomes_newline(self) -> None:
        assert strip_codes("Yankees batting.^n^Judge walked.") == "Yankees batting.\nJudge walked."

    def test_plain_text_untouched(self) -> None:
        assert strip_codes("  no codes here ") == "no codes here"


class TestNormalizeName:
    def test_case_and_whitespace_insensitive(self) -> None:
        assert normalize_name("  ^c3^JSmith99^e^ ") == "jsmith99"

    def test_none(self) -> None:
        assert normalize_name(None) == ""


class TestParseIntSafe:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("12", 12), (" 7 ", 7), ("3*", 3), ("-2", -2), ("4.0", 4), (5, 5), ("", 0), (None, 0), ("abc", 0), ("-", 0)],
    )
    def test_values(self, raw: object, expected: int) -> None:
        assert parse_int_safe(raw) == expected


class TestToIso:
    def test_display_date(self) -> None:
        assert to_iso("04/15/2024 13:05:30") == "2024-04-15T13:05:30.000Z"

    def test_not_a_date(self) -> None:
        assert to_iso("not a date") is None

    def test_empty(self) -> None:
        assert to_iso(None) is None
        assert to_iso("") is None

    def test_impossible_date(self) -> None:
        assert to_iso("13/45/2024 00:00:00") is None


class TestIpToOuts:
    @pytest.mark.parametrize(("ip", "outs"), [("6.2", 20), ("7.0", 21), ("0.1", 1), ("9", 27), ("", 0), (None, 0)])
    def test_values(self, ip: object, outs: int) -> None:
        assert ip_to_outs(ip) == outs


class TestNames:
    def test_batter_prefixes_removed(self) -> None:
        assert clean_batter_name("a-Aaron Judge") == "Aaron Judge"
        assert clean_batter_name("2- Juan  Soto") == "Juan Soto"

    def test_batter_trailing_position_removed(self) -> None:
        assert clean_batter_name("Aaron Judge, RF") == "Aaron Judge"

    def test_pitcher_decision_removed(self) -> None:
        assert clean_pitcher_name("Gerrit Cole (W, 3-1)") == "Gerrit Cole"
        assert clean_pitcher_name("Clay Holmes (S)") == "Clay Holmes"

    def test_last_name(self) -> None:
        assert last_name("  Gerrit Cole ") == "cole"
        assert last_name("") == ""
