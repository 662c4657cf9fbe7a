import pytest

from conftest import FakeRunner, make_dump
from utitool.aggregate import aggregate_dump
from utitool.errors import EnvironmentFailure
from utitool.lsregister import (
    LSREGISTER_PATH,
    PLACEHOLDER_UTI,
    RECORD_DELIMITER,
    dump_registry,
    iter_fields,
    parse_dump,
    parse_record,
    split_records,
)
from utitool.process import ProcessResult


def test_split_records_skips_preamble_and_other_blocks(sample_dump):
    records = list(split_records(sample_dump))
    assert len(records) == 4
    for record in records:
        assert record.startswith("type id:")
        assert RECORD_DELIMITER not in record


def test_split_records_without_delimiter_returns_whole_text():
    text = "type id: com.example.a (0x1)\ntags: .a"
    assert list(split_records(text)) == [text]


def test_split_records_handles_leading_separator():
    text = ":\nnoise\n" + RECORD_DELIMITER + "\ntype id: com.example.a (0x1)\nbundle: App (0x2)\n"
    records = list(split_records(text))
    assert records == ["type id: com.example.a (0x1)\nbundle: App (0x2)\n"]


def test_split_records_block_without_separator_keeps_next_record():
    text = make_dump("no separator in this block\n", "type id: com.example.a (0x1)\nbundle: App (0x2)\n")
    assert list(split_records(text)) == ["type id: com.example.a (0x1)\nbundle: App (0x2)\n"]
    assert list(aggregate_dump(text).utis) == ["com.example.a"]


def test_split_records_adjacent_delimiters():
    text = make_dump("", "type id: com.example.a (0x1)\nbundle: App (0x2)\n", "", "type id: com.example.b (0x3)\ntags: .b\n")
    records = list(split_records(text))
    assert [record.split("\n")[0] for record in records] == [
        "type id: com.example.a (0x1)",
        "type id: com.example.b (0x3)",
    ]


def test_split_records_empty_and_noise_only():
    assert list(split_records("")) == []
    assert list(split_records("Status: nothing to see\n" + RECORD_DELIMITER + "\n")) == []


def test_iter_fields_keeps_colons_in_values():
    fields = list(iter_fields("reference URL:   https://example.com:8080/x\n{\n}\nflags: active"))
    assert fields == [("reference URL", "https://example.com:8080/x"), ("flags", "active")]


def test_parse_record_uti_is_first_token():
    record = parse_record("type id:    com.example.foo (0x1)\nbundle: App (0x2)\n")
    assert record.uti == "com.example.foo"
    assert record.app_names() == ["App"]


def test_parse_record_needs_two_lines():
    assert parse_record("type id: com.example.foo (0x1)") is None


def test_parse_record_reference_url_intact():
    record = parse_record("type id: com.example.foo (0x1)\nreference URL: https://example.com/x\n")
    assert record.ref == "https://example.com/x"


def test_parse_record_sorts_tags():
    record = parse_record("type id: com.example.foo (0x1)\ntags: .foo, text/foo, ????, public.foo, .bar\n")
    assert record.extensions == [".foo", ".bar"]
    assert record.mime_types == ["text/foo"]


def test_parse_record_parents():
    record = parse_record("type id: com.example.foo (0x1)\nconforms to: public.data, public.item\n")
    assert record.parents == ["public.data", "public.item"]


def test_parse_record_drops_core_types_hardware():
    raw = "type id: com.apple.macbook-pro (0x1)\nbundle: CoreTypes (0x3)\ntags: .mbp\n"
    assert parse_record(raw) is None


def test_parse_record_keeps_core_types_content():
    record = parse_record("type id: public.plain-text (0x1)\nbundle: CoreTypes (0x3)\n")
    assert record.app_names() == ["CoreTypes"]


def test_parse_record_hardware_needs_core_types():
    record = parse_record("type id: com.apple.macbook-pro (0x1)\nbundle: Some App (0x3)\n")
    assert record.uti == "com.apple.macbook-pro"


def test_parse_record_filter_can_be_disabled():
    raw = "type id: com.apple.macbook-pro (0x1)\nbundle: CoreTypes (0x3)\n"
    assert parse_record(raw, hardware_filter=None).uti == "com.apple.macbook-pro"


def test_parse_record_fields_before_type_id_get_placeholder():
    record = parse_record("bundle: App (0x1)\ntags: .foo, text/foo\n")
    assert record.uti == PLACEHOLDER_UTI
    assert record.app_names() == ["App"]
    assert record.extensions == [".foo"]
    assert record.mime_types == ["text/foo"]


def test_parse_record_new_type_id_starts_fresh():
    record = parse_record("bundle: App (0x1)\ntype id: com.example.foo (0x2)\ntags: .foo\n")
    assert record.uti == "com.example.foo"
    assert record.apps == []


def test_parse_dump(sample_dump):
    utis = [record.uti for record in parse_dump(sample_dump)]
    assert utis == ["public.plain-text", "net.daringfireball.markdown", "net.daringfireball.markdown"]


def test_parse_dump_filter_is_idempotent():
    text = make_dump("type id: com.apple.ipad (0x1)\nbundle: CoreTypes (0x2)\n")
    assert list(parse_dump(text)) == []
    assert list(parse_dump(text)) == []


def test_dump_registry_returns_output(fake_runner, sample_dump):
    assert dump_registry(fake_runner) == sample_dump
    assert fake_runner.calls == [(LSREGISTER_PATH, ["-dump"])]


def test_dump_registry_path_override(monkeypatch, fake_runner):
    monkeypatch.setenv("UTITOOL_LSREGISTER", "/opt/bin/lsregister")
    dump_registry(fake_runner)
    assert fake_runner.calls[0][0] == "/opt/bin/lsregister"


def test_dump_registry_failure_is_fatal():
    runner = FakeRunner({"lsregister": ProcessResult(3, "partial output", "lsregister: boom\n")})
    with pytest.raises(EnvironmentFailure) as info:
        dump_registry(runner)
    assert str(info.value) == "lsregister: boom"
    assert info.value.status == 3
