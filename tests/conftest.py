"""Configuration and fixtures for pytest tests."""

import pytest
import socket
import struct
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


LOCAL_MAC = "02:00:00:AA:BB:CC"
LOCAL_IP = "10.0.0.5"


# ── Helpers: raw frame builders ──

def mac_bytes(mac: str) -> bytes:
    return bytes(int(x, 16) for x in mac.split(':'))


def ip4_bytes(ip: str) -> bytes:
    return socket.inet_pton(socket.AF_INET, ip)


def build_eth(src="00:11:22:33:44:55", dst="ff:ff:ff:ff:ff:ff", ethertype=0x0800) -> bytes:
    return mac_bytes(dst) + mac_bytes(src) + struct.pack('>H', ethertype)


def build_arp(
    sender_mac="00:11:22:33:44:55", sender_ip="192.168.1.10",
    target_mac="00:00:00:00:00:00", target_ip="192.168.1.1",
    opcode=1,
) -> bytes:
    """Standard ARP over Ethernet (42 bytes)."""
    eth = build_eth(src=sender_mac, dst="ff:ff:ff:ff:ff:ff", ethertype=0x0806)
    arp = struct.pack('>HHBBH', 1, 0x0800, 6, 4, opcode)
    arp += mac_bytes(sender_mac) + ip4_bytes(sender_ip)
    arp += mac_bytes(target_mac) + ip4_bytes(target_ip)
    return eth + arp


def build_ipv4(src="192.168.1.1", dst="192.168.1.2", proto=1, payload=b'',
               ident=0x1234, flags_frag=0x4000, ttl=64, ihl=5) -> bytes:
    """Ethernet + IPv4 header (+ options when ihl > 5) + payload."""
    options = b'\x00' * ((ihl - 5) * 4)
    total_len = ihl * 4 + len(payload)
    header = struct.pack('>BBHHHBBH4s4s',
                         0x40 | ihl, 0, total_len, ident, flags_frag,
                         ttl, proto, 0,
                         ip4_bytes(src), ip4_bytes(dst))
    return build_eth(dst="aa:bb:cc:dd:ee:ff") + header + options + payload


def build_udp(sport=12345, dport=53, payload=b'') -> bytes:
    udp = struct.pack('>HHHH', sport, dport, 8 + len(payload), 0) + payload
    return build_ipv4(proto=17, payload=udp)


def build_tcp(sport=12345, dport=80, seq=1000, ack=0, offset_flags=0x5002,
              window=8192, payload=b'') -> bytes:
    tcp = struct.pack('>HHIIHHHH', sport, dport, seq, ack, offset_flags, window, 0, 0) + payload
    return build_ipv4(proto=6, payload=tcp)


@pytest.fixture
def substitutions():
    """Addresses of the active interface."""
    return {'__LOCAL_MAC__': LOCAL_MAC, '__LOCAL_IP__': LOCAL_IP}


@pytest.fixture
def codec(substitutions):
    """Preview-mode codec bound to the local addresses."""
    from hexframe import FrameCodec
    return FrameCodec(substitutions=substitutions)


@pytest.fixture
def arp_hex():
    return build_arp().hex().upper()


@pytest.fixture
def udp_hex():
    return build_udp(payload=b'hello').hex().upper()


@pytest.fixture
def tcp_hex():
    return build_tcp(payload=b'GET /').hex().upper()
