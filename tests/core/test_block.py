"""Tests for the Block model."""

import pytest

from pagefill.models.block import Block, BlockKind
from pagefill.utils.exceptions import MalformedBlockError


class TestBlockKind:
    """Test cases for BlockKind parsing."""

    @pytest.mark.parametrize("value, expected", [
        ("data_row", BlockKind.DATA_ROW),
        ("DataRow", BlockKind.DATA_ROW),
        ("TABLE_HEADER", BlockKind.TABLE_HEADER),
        ("GroupHeader", BlockKind.GROUP_HEADER),
        ("continuation_note", BlockKind.CONTINUATION_NOTE),
        (BlockKind.GROUP_HEADER, BlockKind.GROUP_HEADER),
    ])
    def test_parse(self, value, expected):
        assert BlockKind.parse(value) is expected

    @pytest.mark.parametrize("value", ["Footnote", "", 3, None])
    def test_parse_unknown(self, value):
        with pytest.raises(MalformedBlockError):
            BlockKind.parse(value)


class TestBlock:
    """Test cases for Block."""

    def test_default_units(self):
        assert Block.data_row(("a",)).intrinsic_units == 1
        assert Block.table_header(("a",)).intrinsic_units == 0
        assert Block.group_header("Zone").intrinsic_units == 0
        assert Block.data_row(("a",), units=3).intrinsic_units == 3

    def test_only_engine_notes_are_synthesized(self):
        assert Block.continuation_note("Zone", "g1").is_synthesized
        assert not Block(BlockKind.CONTINUATION_NOTE, "Zone", "g1").is_synthesized
        assert not Block.data_row(("a",)).is_synthesized

    def test_is_frozen(self):
        block = Block.data_row(("a",))

        with pytest.raises(AttributeError):
            block.content = ("b",)

    def test_from_dict(self):
        block = Block.from_dict({"kind": "DataRow", "content": ["Ana", "555"], "groupId": 7, "cost": 2})

        assert block.kind is BlockKind.DATA_ROW
        assert block.content == ["Ana", "555"]
        assert block.group_id == "7"
        assert block.units == 2

    @pytest.mark.parametrize("data", [
        {"content": "x"},
        {"kind": "data_row"},
        {"kind": "Image", "content": "x"},
    ])
    def test_from_dict_malformed(self, data):
        with pytest.raises(MalformedBlockError):
            Block.from_dict(data)

    def test_to_dict(self):
        block = Block.data_row(("Ana", "555"), "g1", units=2)

        assert block.to_dict() == {
            "kind": "data_row",
            "content": ["Ana", "555"],
            "group_id": "g1",
            "units": 2,
        }
        assert Block.continuation_note("Zone", "g1").to_dict()["synthesized"] is True
