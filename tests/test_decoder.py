"""Tests for field decoding from raw hex."""

from __future__ import annotations

import pytest

from hexframe import decode, decode_fields
from hexframe.core.encoder import encode_tokens
from hexframe.core.schema import ARP_SCHEMA, TCP_SCHEMA
from hexframe.protocols import (
    ARPDecoder,
    BaseFieldDecoder,
    DecoderRegistry,
    EthernetDecoder,
    Layer,
    TCPDecoder,
    get_decoder_registry,
    register_decoder,
)

from conftest import build_arp, build_ipv4, build_tcp, build_udp


def _hex(data: bytes) -> str:
    return data.hex().upper()


class TestEthernet:

    def test_scenario(self):
        assert decode_fields("FFFFFFFFFFFF0011223344550800AABB", "ethernet") == {
            "dst_mac": "FF:FF:FF:FF:FF:FF",
            "src_mac": "00:11:22:33:44:55",
            "ether_type": "0800",
            "data": "AABB",
        }

    def test_header_only(self):
        fields = decode_fields("FFFFFFFFFFFF0011223344550800", "ethernet")
        assert fields["data"] == ""

    def test_too_short(self):
        assert decode_fields("FFFFFFFFFFFF001122334455080", "ethernet") == {}
        assert decode_fields("FFFF", "ethernet") == {}

    def test_lowercase_and_spaces(self):
        fields = decode_fields("ff ff ff ff ff ff 00 11 22 33 44 55 08 00 aa bb", "ethernet")
        assert fields["dst_mac"] == "FF:FF:FF:FF:FF:FF"
        assert fields["data"] == "AABB"


class TestUnknownInput:

    @pytest.mark.parametrize("protocol", [None, "", "icmp", "ETHERNET"])
    def test_unknown_protocol(self, protocol):
        assert decode_fields("FF" * 64, protocol) == {}

    def test_empty_hex(self):
        assert decode_fields("", "arp") == {}
        assert decode_fields(None, "arp") == {}

    def test_alias(self):
        assert decode is decode_fields

    def test_fresh_map(self):
        first = decode_fields("FFFFFFFFFFFF0011223344550800AABB", "ethernet")
        first["data"] = "changed"
        second = decode_fields("FFFFFFFFFFFF0011223344550800AABB", "ethernet")
        assert second["data"] == "AABB"


class TestARP:

    def test_addresses(self, arp_hex):
        fields = decode_fields(arp_hex, "arp")
        assert fields["dst_mac"] == "FF:FF:FF:FF:FF:FF"
        assert fields["ether_type"] == "0806"
        assert fields["hwType"] == "0001"
        assert fields["protoType"] == "0800"
        assert fields["srcMac"] == "00:11:22:33:44:55"
        assert fields["srcIp"] == "192.168.1.10"
        assert fields["dstMac"] == "00:00:00:00:00:00"
        assert fields["dstIp"] == "192.168.1.1"
        assert fields["data"] == ""

    def test_opcode_read_from_shifted_offset(self, arp_hex):
        # Reads the protocol address length byte and the high opcode byte
        assert decode_fields(arp_hex, "arp")["opcode"] == "0400"

    def test_encoded_request_opcode(self):
        hex_data = "".join(encode_tokens({}, ARP_SCHEMA))
        assert decode_fields(hex_data, "arp")["opcode"] == "0400"

    def test_trailing_padding_is_data(self):
        hex_data = _hex(build_arp()) + "00" * 18
        assert decode_fields(hex_data, "arp")["data"] == "00" * 18

    def test_partial_addresses(self):
        fields = decode_fields(_hex(build_arp())[:60], "arp")
        assert fields["srcMac"] == "00:11:22:33:44:55"
        assert fields["srcIp"] == ""
        assert fields["dstMac"] == ""

    def test_too_short(self):
        assert decode_fields(_hex(build_arp())[:54], "arp") == {}


class TestIPv4:

    def test_header(self):
        fields = decode_fields(_hex(build_ipv4(proto=1, payload=b"\x08\x00")), "ipv4")
        assert fields["version"] == "4"
        assert fields["ihl"] == "5"
        assert fields["tos"] == "0"
        assert fields["total_length"] == "22"
        assert fields["identification"] == "4660"
        assert fields["flags"] == "2"
        assert fields["fragment_offset"] == "0"
        assert fields["ttl"] == "64"
        assert fields["protocol"] == "1"
        assert fields["header_checksum"] == "0"
        assert fields["srcIp"] == "192.168.1.1"
        assert fields["dstIp"] == "192.168.1.2"
        assert fields["data"] == "0800"

    def test_options_skipped_by_ihl(self):
        fields = decode_fields(_hex(build_ipv4(ihl=6, payload=b"\xab")), "ipv4")
        assert fields["ihl"] == "6"
        assert fields["data"] == "AB"

    def test_too_short(self):
        assert decode_fields(_hex(build_ipv4())[:66], "ipv4") == {}


class TestUDP:

    def test_fields(self, udp_hex):
        fields = decode_fields(udp_hex, "udp")
        assert fields["protocol"] == "17"
        assert fields["srcPort"] == "12345"
        assert fields["dstPort"] == "53"
        assert fields["length"] == "13"
        assert fields["checksum"] == "0"
        assert bytes.fromhex(fields["data"]) == b"hello"

    def test_short_falls_back_to_ipv4(self, udp_hex):
        fields = decode_fields(udp_hex[:76], "udp")
        assert "srcPort" not in fields
        assert fields["srcIp"] == "192.168.1.1"


class TestTCP:

    def test_ports_and_numbers(self, tcp_hex):
        fields = decode_fields(tcp_hex, "tcp")
        assert fields["srcPort"] == "12345"
        assert fields["dstPort"] == "80"
        assert fields["seq"] == "1000"
        assert fields["ack"] == "0"
        assert fields["window_size"] == "8192"
        assert fields["urgent_pointer"] == "0"
        assert bytes.fromhex(fields["data"]) == b"GET /"

    def test_offset_and_flags_nibbles(self, tcp_hex):
        # 0x5002 word: nibbles 5, 0, 0, 2
        fields = decode_fields(tcp_hex, "tcp")
        assert fields["data_offset"] == "1"
        assert fields["reserved"] == "0"
        for flag in ("urg", "ack", "psh", "rst", "syn", "fin"):
            assert fields[f"flag_{flag}"] == "0"

    def test_flags_from_third_nibble(self):
        fields = decode_fields(_hex(build_tcp(offset_flags=0x53F0)), "tcp")
        assert fields["flag_urg"] == "1"
        assert fields["flag_ack"] == "1"
        assert fields["flag_psh"] == "1"
        assert fields["flag_rst"] == "1"
        assert fields["flag_syn"] == "1"
        assert fields["flag_fin"] == "1"

    def test_encoded_syn(self):
        hex_data = "".join(encode_tokens({"flag_syn": "1"}, TCP_SCHEMA))
        assert hex_data[92:96] == "5002"
        fields = decode_fields(hex_data, "tcp")
        assert fields["data_offset"] == "1"
        assert fields["flag_syn"] == "0"
        assert fields["data"] == "00" * 10

    def test_partial_header(self, tcp_hex):
        fields = decode_fields(tcp_hex[:96], "tcp")
        assert fields["seq"] == "1000"
        assert fields["data_offset"] == "1"
        assert "window_size" not in fields
        assert fields["data"] == ""

    def test_short_falls_back_to_ipv4(self, tcp_hex):
        fields = decode_fields(tcp_hex[:80], "tcp")
        assert "srcPort" not in fields
        assert fields["protocol"] == "6"


class TestDecoderRegistry:

    def test_builtin_decoders(self):
        registry = get_decoder_registry()
        assert set(registry.list_decoders()) >= {"ethernet", "arp", "ipv4", "tcp", "udp"}
        assert registry.get("arp") is ARPDecoder
        assert TCPDecoder in registry.get_by_layer(Layer.TRANSPORT)
        assert ARPDecoder.decoder_id() == "network.arp"

    def test_custom_decoder(self):
        registry = DecoderRegistry()

        @register_decoder("vlan", Layer.DATA_LINK, min_length=36, registry=registry)
        class VLANDecoder(EthernetDecoder):
            def decode(self, hex_data):
                fields = self.decode_header(hex_data)
                fields["vlan_id"] = str(int(hex_data[28:32], 16) & 0x0FFF)
                return fields

        assert "vlan" in registry
        hex_data = "FFFFFFFFFFFF00112233445581000064" + "0800"
        fields = decode_fields(hex_data, "vlan", registry=registry)
        assert fields["vlan_id"] == "100"
        assert decode_fields(hex_data[:32], "vlan", registry=registry) == {}

    def test_duplicate_rejected(self):
        registry = DecoderRegistry()

        class Dummy(BaseFieldDecoder):
            name = "dummy"

            def decode(self, hex_data):
                return {}

        registry.register(Dummy)
        with pytest.raises(ValueError):
            registry.register(Dummy)
        assert registry.unregister("dummy")
        assert not registry.unregister("dummy")
