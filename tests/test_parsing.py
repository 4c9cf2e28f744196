import sys
import os
import io
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from errors import (
    MalformedAmount,
    MalformedHeader,
    MalformedId,
    MissingAmount,
    ParseError,
    UnexpectedAmount,
    UnknownType,
)
from models import Chargeback, Deposit, Dispute, Resolve, Withdrawal
from parsing import parse_row, read_rows


def row(type_, client="1", tx="1", amount=None):
    return {"type": type_, "client": client, "tx": tx, "amount": amount}


class TestParseRow:
    def test_deposit(self):
        assert parse_row(row("deposit", amount="1.5")) == Deposit(client=1, tx=1, amount=Decimal("1.5"))

    def test_withdrawal_and_alias(self):
        expected = Withdrawal(client=2, tx=7, amount=Decimal("3"))
        assert parse_row(row("withdrawal", "2", "7", "3")) == expected
        assert parse_row(row("withdraw", "2", "7", "3")) == expected

    def test_amountless_types(self):
        assert parse_row(row("dispute")) == Dispute(client=1, tx=1)
        assert parse_row(row("resolve", amount="")) == Resolve(client=1, tx=1)
        assert parse_row(row("chargeback", amount="  ")) == Chargeback(client=1, tx=1)

    def test_case_and_whitespace_tolerated(self):
        assert parse_row(row("  DePoSiT ", " 3 ", " 4", "5 ")) == Deposit(client=3, tx=4, amount=Decimal("5"))

    @pytest.mark.parametrize("value", ["transfer", "", None, "deposits"])
    def test_unknown_type(self, value):
        with pytest.raises(UnknownType):
            parse_row(row(value, amount="1"))

    @pytest.mark.parametrize("type_", ["deposit", "withdrawal"])
    def test_missing_amount(self, type_):
        with pytest.raises(MissingAmount):
            parse_row(row(type_))

    @pytest.mark.parametrize("type_", ["dispute", "resolve", "chargeback"])
    def test_unexpected_amount(self, type_):
        with pytest.raises(UnexpectedAmount):
            parse_row(row(type_, amount="1.0"))

    def test_unexpected_amount_is_malformed_amount(self):
        assert issubclass(UnexpectedAmount, MalformedAmount)

    def test_malformed_amount(self):
        with pytest.raises(MalformedAmount):
            parse_row(row("deposit", amount="ten"))

    @pytest.mark.parametrize("client, tx", [
        ("x", "1"),
        ("1", "-1"),
        ("1.0", "1"),
        ("", "1"),
        (None, "1"),
        ("1", None),
        ("65536", "1"),
        ("1", "4294967296"),
        ("١", "1"),
    ])
    def test_malformed_id(self, client, tx):
        with pytest.raises(MalformedId):
            parse_row(row("deposit", client, tx, "1"))

    def test_type_checked_before_ids(self):
        with pytest.raises(UnknownType):
            parse_row(row("bogus", "x", "y"))

    def test_all_parse_errors_share_base(self):
        for cls in (UnknownType, MissingAmount, MalformedAmount, MalformedId, MalformedHeader):
            assert issubclass(cls, ParseError)


class TestReadRows:
    def test_header_whitespace_and_short_rows(self):
        lines = io.StringIO("type, client, tx, amount\ndeposit, 1, 1, 2.0\ndispute, 1, 1\n")
        rows = list(read_rows(lines))

        assert rows[0] == {"type": "deposit", "client": "1", "tx": "1", "amount": "2.0"}
        assert rows[1]["type"] == "dispute"
        assert rows[1]["amount"] is None

    def test_skips_comments_and_blank_lines(self):
        lines = io.StringIO("# header comment\ntype,client,tx,amount\n\n# note\ndeposit,1,1,1\n   \n")
        rows = list(read_rows(lines))

        assert len(rows) == 1
        assert rows[0]["type"] == "deposit"

    def test_extra_cells_ignored(self):
        lines = io.StringIO("type,client,tx,amount\ndeposit,1,1,1,surplus\n")
        rows = list(read_rows(lines))

        assert rows == [{"type": "deposit", "client": "1", "tx": "1", "amount": "1"}]

    def test_empty_input(self):
        assert list(read_rows(io.StringIO(""))) == []

    def test_missing_columns(self):
        with pytest.raises(MalformedHeader) as excinfo:
            list(read_rows(io.StringIO("kind,client\ndeposit,1\n")))
        assert excinfo.value.missing == ("type", "tx")

    def test_rows_parse(self):
        lines = io.StringIO("type,client,tx,amount\ndeposit,1,1,1.0\nchargeback,1,1,\n")
        records = [parse_row(r) for r in read_rows(lines)]

        assert records == [Deposit(client=1, tx=1, amount=Decimal("1.0")), Chargeback(client=1, tx=1)]

    def test_stray_quote_stays_in_its_row(self):
        lines = io.StringIO(
            'type, client, tx, amount\n'
            'deposit, 1, 1, 10.0\n'
            'deposit, 2, 2, "5\n'
            'deposit, 3, 3, 7.0\n'
        )
        rows = list(read_rows(lines))

        assert [r["client"] for r in rows] == ["1", "2", "3"]
        assert rows[1]["amount"] == '"5'
        with pytest.raises(MalformedAmount):
            parse_row(rows[1])
        assert parse_row(rows[2]) == Deposit(client=3, tx=3, amount=Decimal("7.0"))
