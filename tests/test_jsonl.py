import io

import pytest

from ocitranslator.errors import InventoryParseError
from ocitranslator.jsonl import JsonlWriter, iter_jsonl_lines


def test_blank_lines_are_skipped_and_last_is_flagged():
    stream = io.StringIO('\n{"a":1}\n\n   \n{"b":2}\n\n')

    lines = list(iter_jsonl_lines(stream, name="mem"))

    assert [l.data for l in lines] == [{"a": 1}, {"b": 2}]
    assert [l.line_no for l in lines] == [2, 5]
    assert [l.last for l in lines] == [False, True]


def test_single_line_is_last():
    lines = list(iter_jsonl_lines(['{"sku":"A1"}']))
    assert len(lines) == 1
    assert lines[0].last


def test_empty_stream_yields_nothing():
    assert list(iter_jsonl_lines(io.StringIO(""))) == []


def test_invalid_line_reports_position():
    with pytest.raises(InventoryParseError) as exc:
        list(iter_jsonl_lines(["{}\n", "{nope\n"], name="input.jsonl"))

    assert exc.value.line == 2
    assert "input.jsonl:2" in str(exc.value)


def test_parsing_is_lazy():
    lines = iter_jsonl_lines(["{}\n", "{}\n", "broken\n"])

    first = next(lines)
    assert first.data == {}
    with pytest.raises(InventoryParseError):
        next(lines)


def test_writer_emits_compact_lines():
    buf = io.StringIO()
    w = JsonlWriter(buf)

    w.write({"sku": "A1", "onHand": 5})
    w.write({"sku": "Ñ"})
    w.write({"sku": "B2"})

    assert buf.getvalue() == '{"sku":"A1","onHand":5}\n{"sku":"Ñ"}\n{"sku":"B2"}\n'
