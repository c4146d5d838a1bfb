"""Tests for the lenient value parsers."""

from datetime import date
from decimal import Decimal

import pytest

from boewatch.domain.models.values import (
    DEFAULT_DATE,
    DEFAULT_TEXT,
    clean_text,
    format_money,
    parse_date,
    parse_int,
    parse_money,
    parse_vehicle_date,
    text_or_default,
)


class TestParseMoney:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("81.971,57 €", Decimal("81971.57")),
            ("755,00 €", Decimal("755.00")),
            ("1.234.567,89 €", Decimal("1234567.89")),
            ("0,50", Decimal("0.50")),
        ],
    )
    def test_parses_spanish_amounts(self, text, expected):
        assert parse_money(text) == expected

    @pytest.mark.parametrize("text", [None, "Sin puja mínima", "Sin tramos", "-", ""])
    def test_missing_or_non_numeric_is_zero(self, text):
        assert parse_money(text) == Decimal("0.00")

    def test_format_keeps_two_decimals(self):
        assert format_money(Decimal("75127")) == "75127.00"
        assert format_money(parse_money("3.756,35 €")) == "3756.35"


class TestParseDate:
    def test_reads_day_month_year_before_first_space(self):
        text = "14-07-2020 18:00:00 CET  (ISO: 2020-07-14T18:00:00+02:00)"
        assert parse_date(text) == date(2020, 7, 14)

    @pytest.mark.parametrize("text", [None, "", "mañana", "2020-07-14"])
    def test_falls_back_to_sentinel(self, text):
        assert parse_date(text) == DEFAULT_DATE == date(2000, 1, 1)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("2015-03-20", date(2015, 3, 20)),
            ("2015/03/20", date(2015, 3, 20)),
            ("20-03-2015", date(2015, 3, 20)),
            ("20/03/2015", date(2015, 3, 20)),
        ],
    )
    def test_vehicle_date_accepts_both_orders(self, text, expected):
        assert parse_vehicle_date(text) == expected

    def test_vehicle_date_failure_logs_and_defaults(self, caplog):
        assert parse_vehicle_date("desconocida") == DEFAULT_DATE
        assert "Unable to parse licensed date" in caplog.text


class TestText:
    def test_clean_text_spaces_punctuation(self):
        assert (
            clean_text("FINCA URBANA,CALLE MAYOR NUM.90,  BAJO")
            == "FINCA URBANA, CALLE MAYOR NUM. 90, BAJO"
        )

    def test_clean_text_missing_is_default(self):
        assert clean_text(None) == DEFAULT_TEXT

    def test_text_or_default(self):
        assert text_or_default(None) == "NA"
        assert text_or_default("47014") == "47014"

    @pytest.mark.parametrize("text,expected", [("2", 2), (" 12 ", 12), ("Sin lotes", 0), (None, 0)])
    def test_parse_int(self, text, expected):
        assert parse_int(text) == expected
