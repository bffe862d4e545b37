"""
Frame templates.

A template is a named field map for one protocol. Templates refer to the
active interface through the dynamic placeholders, so a template saved on
one machine renders with the local addresses of another.
"""

from __future__ import annotations

import copy
import json
import re
import time
import warnings
from pathlib import Path
from typing import Any

from hexframe.core.placeholder import LOCAL_IP, LOCAL_MAC

_CREATED = "2024-01-01T00:00:00.000Z"

DEFAULT_TEMPLATES: tuple[dict[str, Any], ...] = (
    {
        'id': 'default-arp-request',
        'name': 'ARP request - network discovery',
        'description': 'Broadcast ARP request used to discover devices on the network',
        'protocol': 'arp',
        'fields': {
            'dst_mac': 'FF:FF:FF:FF:FF:FF',
            'src_mac': LOCAL_MAC,
            'ether_type': '0806',
            'hwType': '0001',
            'protoType': '0800',
            'opcode': '0001',
            'srcMac': LOCAL_MAC,
            'srcIp': LOCAL_IP,
            'dstMac': '00:00:00:00:00:00',
            'dstIp': '192.168.1.1',
            'data': '',
        },
        'tags': ['discovery', 'common', 'ARP'],
        'createdAt': _CREATED,
        'updatedAt': _CREATED,
    },
    {
        'id': 'default-ping-request',
        'name': 'ICMP ping request',
        'description': 'Standard echo request for connectivity tests',
        'protocol': 'ipv4',
        'fields': {
            'dst_mac': 'AA:BB:CC:DD:EE:FF',
            'src_mac': LOCAL_MAC,
            'ether_type': '0800',
            'version': '4',
            'ihl': '5',
            'tos': '0',
            'total_length': '84',
            'identification': '1234',
            'flags': '2',
            'fragment_offset': '0',
            'ttl': '64',
            'protocol': '1',
            'header_checksum': '0',
            'srcIp': LOCAL_IP,
            'dstIp': '8.8.8.8',
            'data': '0800f7fc00000000',
        },
        'tags': ['testing', 'ICMP', 'connectivity'],
        'createdAt': _CREATED,
        'updatedAt': _CREATED,
    },
    {
        'id': 'default-tcp-syn',
        'name': 'TCP SYN - port probe',
        'description': 'TCP SYN segment for port probing and connection tests',
        'protocol': 'tcp',
        'fields': {
            'dst_mac': 'AA:BB:CC:DD:EE:FF',
            'src_mac': LOCAL_MAC,
            'ether_type': '0800',
            'srcIp': LOCAL_IP,
            'dstIp': '192.168.1.1',
            'srcPort': '12345',
            'dstPort': '80',
            'seq': '1000000',
            'ack': '0',
            'data_offset': '5',
            'reserved': '0',
            'flag_urg': '0',
            'flag_ack': '0',
            'flag_psh': '0',
            'flag_rst': '0',
            'flag_syn': '1',
            'flag_fin': '0',
            'window_size': '8192',
            'checksum': '0',
            'urgent_pointer': '0',
            'data': '',
        },
        'tags': ['probe', 'TCP', 'security'],
        'createdAt': _CREATED,
        'updatedAt': _CREATED,
    },
    {
        'id': 'default-udp-dns',
        'name': 'UDP DNS query',
        'description': 'DNS A query for www.google.com',
        'protocol': 'udp',
        'fields': {
            'dst_mac': 'AA:BB:CC:DD:EE:FF',
            'src_mac': LOCAL_MAC,
            'ether_type': '0800',
            'srcIp': LOCAL_IP,
            'dstIp': '8.8.8.8',
            'srcPort': '12345',
            'dstPort': '53',
            'length': '40',
            'checksum': '0',
            'data': '0001010000010000000000000377777706676f6f676c6503636f6d0000010001',
        },
        'tags': ['DNS', 'UDP', 'resolution'],
        'createdAt': _CREATED,
        'updatedAt': _CREATED,
    },
    {
        'id': 'default-ethernet-broadcast',
        'name': 'Ethernet broadcast',
        'description': 'Custom Ethernet broadcast frame for network tests',
        'protocol': 'ethernet',
        'fields': {
            'dst_mac': 'FF:FF:FF:FF:FF:FF',
            'src_mac': LOCAL_MAC,
            'ether_type': '0800',
            'data': '48656c6c6f20576f726c64',  # "Hello World"
        },
        'tags': ['broadcast', 'ethernet', 'testing'],
        'createdAt': _CREATED,
        'updatedAt': _CREATED,
    },
)

# Keys whose values are replaced by placeholders when a template is saved
LOCAL_MAC_KEYS = frozenset({'src_mac', 'srcmac', 'source_mac'})
LOCAL_IP_KEYS = frozenset({'src_ip', 'srcip', 'source_ip'})

_MAC_RE = re.compile(r'^[0-9a-fA-F]{2}(:[0-9a-fA-F]{2}){5}$')
_IP_RE = re.compile(r'^\d+\.\d+\.\d+\.\d+$')


def default_templates() -> list[dict[str, Any]]:
    """Fresh, independently mutable copies of the default templates."""
    return copy.deepcopy(list(DEFAULT_TEMPLATES))


def restore_placeholders(fields: dict[str, Any]) -> dict[str, Any]:
    """
    Replace local source addresses with dynamic placeholders.

    Source MAC/IP fields holding a concrete address are turned back into
    ``__LOCAL_MAC__`` / ``__LOCAL_IP__`` so the template follows whichever
    interface is active when it is loaded. Returns a new dict.
    """
    result = {}
    for key, value in fields.items():
        lowered = key.lower()
        if isinstance(value, str) and value.strip():
            if lowered in LOCAL_MAC_KEYS and _MAC_RE.match(value):
                result[key] = LOCAL_MAC
                continue
            if lowered in LOCAL_IP_KEYS and _IP_RE.match(value):
                result[key] = LOCAL_IP
                continue
        result[key] = value
    return result


def make_template(
    name: str,
    protocol: str,
    fields: dict[str, Any],
    description: str = "",
    tags: list[str] | str | None = None,
) -> dict[str, Any]:
    """Build a template record from the current editor state."""
    if not name.strip():
        raise ValueError("Template name must not be empty")
    if not protocol or fields is None:
        raise ValueError("Template needs a protocol and a field map")

    if isinstance(tags, str):
        tags = [tag.strip() for tag in tags.split(',')]
    now = time.strftime('%Y-%m-%dT%H:%M:%S.000Z', time.gmtime())
    return {
        'id': str(int(time.time() * 1000)),
        'name': name.strip(),
        'description': description.strip(),
        'protocol': protocol,
        'fields': restore_placeholders(fields),
        'tags': [tag for tag in (tags or []) if tag],
        'createdAt': now,
        'updatedAt': now,
    }


def merge_default_templates(existing: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """Append the default templates whose ids are not already present."""
    if not existing:
        return default_templates()
    existing_ids = {template.get('id') for template in existing}
    missing = [t for t in default_templates() if t['id'] not in existing_ids]
    return list(existing) + missing


def upsert_template(templates: list[dict[str, Any]], template: dict[str, Any]) -> list[dict[str, Any]]:
    """Replace the template with the same name, or append it."""
    result = list(templates)
    for index, current in enumerate(result):
        if current.get('name') == template['name']:
            merged = {**current, **template}
            merged['id'] = current.get('id', template['id'])
            merged['createdAt'] = current.get('createdAt', template['createdAt'])
            result[index] = merged
            return result
    result.append(template)
    return result


class TemplateStore:
    """
    JSON file holding the template list.

    Args:
        path: JSON file path; created with the default templates on first load
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> list[dict[str, Any]]:
        """Load templates, adding any missing defaults. Corrupt files yield []."""
        if not self.path.exists():
            templates = default_templates()
            self.save(templates)
            return templates

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            warnings.warn(f"Cannot read templates from {self.path}: {e}", stacklevel=2)
            return []
        if not isinstance(stored, list):
            warnings.warn(f"Template file {self.path} does not hold a list", stacklevel=2)
            return []

        templates = merge_default_templates(stored)
        if len(templates) != len(stored):
            self.save(templates)
        return templates

    def save(self, templates: list[dict[str, Any]]) -> None:
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(templates, f, indent=2, ensure_ascii=False)

    def add(self, template: dict[str, Any]) -> list[dict[str, Any]]:
        templates = upsert_template(self.load(), template)
        self.save(templates)
        return templates

    def remove(self, template_id: str) -> list[dict[str, Any]]:
        templates = [t for t in self.load() if t.get('id') != template_id]
        self.save(templates)
        return templates
