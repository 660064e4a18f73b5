# -*- coding: utf-8 -*-
"""Tests for coefficient memory transfer."""

import pytest

from distox_lib.protocol.codec import PacketCodec
from distox_lib.protocol.memory import MemoryAssembler
from distox_lib.protocol.memory import coefficient_read_commands
from distox_lib.protocol.memory import coefficient_write_commands
from distox_lib.protocol.models import DeviceInfo
from tests.conftest import memory_reply_frame


class TestCoefficientCommands:
    """Tests for building read/write command sequences."""

    def test_read_commands(self):
        commands = coefficient_read_commands()
        assert len(commands) == 12
        assert commands[0].address == 0x8010
        assert commands[-1].address == 0x803C
        assert [c.address for c in commands] == list(range(0x8010, 0x8040, 4))

    def test_read_command_bytes(self):
        first = PacketCodec.encode_command(coefficient_read_commands()[0])
        assert first == bytes([0x38, 0x10, 0x80])

    def test_write_commands(self):
        data = bytes(range(48))
        commands = coefficient_write_commands(data)
        assert len(commands) == 12
        assert commands[0].address == 0x8010
        assert commands[0].data == bytes([0, 1, 2, 3])
        assert commands[-1].address == 0x803C
        assert commands[-1].data == bytes([44, 45, 46, 47])

    def test_write_command_bytes(self):
        commands = coefficient_write_commands(bytes(range(48)))
        assert PacketCodec.encode_command(commands[1]) == bytes(
            [0x39, 0x14, 0x80, 4, 5, 6, 7]
        )

    @pytest.mark.parametrize("length", [0, 47, 49])
    def test_write_wrong_length(self, length):
        with pytest.raises(ValueError, match="48 bytes"):
            coefficient_write_commands(bytes(length))


class TestMemoryAssembler:
    """Tests for reassembling memory replies."""

    def test_assemble_out_of_order(self):
        """Test replies may arrive in any order."""
        data = bytes(range(100, 148))
        assembler = MemoryAssembler()
        replies = [
            DeviceInfo(address=0x8010 + offset, data=data[offset : offset + 4])
            for offset in range(0, 48, 4)
        ]

        for reply in reversed(replies):
            assert assembler.data() is None
            assert assembler.add(reply) is True

        assert assembler.complete
        assert assembler.data() == data

    def test_assemble_from_frames(self):
        """Test decoded memory reply frames feed the assembler."""
        assembler = MemoryAssembler(start=0x8010, length=8)
        for address, chunk in ((0x8010, b"\x01\x02\x03\x04"), (0x8014, b"\x05\x06\x07\x08")):
            assembler.add(PacketCodec.decode(memory_reply_frame(address, chunk)))
        assert assembler.data() == bytes(range(1, 9))

    def test_repeated_reply_overwrites(self):
        assembler = MemoryAssembler(start=0x8010, length=4)
        assembler.add(DeviceInfo(address=0x8010, data=b"\x00\x00\x00\x00"))
        assembler.add(DeviceInfo(address=0x8010, data=b"\xff\xff\xff\xff"))
        assert assembler.data() == b"\xff\xff\xff\xff"

    @pytest.mark.parametrize("address", [0x800C, 0x8040, 0x8012, 0x0000])
    def test_ignores_foreign_replies(self, address):
        """Test replies outside the block, or misaligned, are ignored."""
        assembler = MemoryAssembler()
        assert assembler.add(DeviceInfo(address=address, data=b"\x00" * 4)) is False
        assert not assembler.complete

    def test_incomplete(self):
        assembler = MemoryAssembler()
        assembler.add(DeviceInfo(address=0x8010, data=b"\x00" * 4))
        assert not assembler.complete
        assert assembler.data() is None

    @pytest.mark.parametrize("length", [0, -4, 6])
    def test_invalid_length(self, length):
        with pytest.raises(ValueError, match="multiple of 4"):
            MemoryAssembler(length=length)
