"""
Basic hexframe usage example.

Demonstrates:
- Building an ARP request from a field map
- Live preview with the local interface addresses
- Turning the frame into bytes, a hex dump and back into fields
- Saving frames to a pcap file
"""

from hexframe import FrameCodec, write_pcap, read_pcap

# Create codec bound to the active interface
codec = FrameCodec(
    min_frame_size=64,       # Pad short frames to the Ethernet minimum
    bytes_per_line=16,       # Preview/dump line width
    substitutions={
        '__LOCAL_MAC__': '00:11:22:33:44:55',
        '__LOCAL_IP__': '192.168.1.10',
    },
)

fields = {
    'srcMac': '__LOCAL_MAC__',
    'srcIp': '__LOCAL_IP__',
    'dstIp': '192.168.1.1',
}

# Preview, as shown while the fields are edited
print(codec.encode(fields, 'arp'))
print()

# Bytes for transmission (raises if a field cannot be encoded)
data = codec.encode_bytes(fields, 'arp')
print(f"Frame length: {len(data)} bytes")

# Hex dump and back
dump = codec.generate_dump(data.hex())
print(dump)
print()

frame = codec.import_dump(dump)
print(f"Protocol: {frame.protocol}")
for key, value in frame.fields.items():
    print(f"  {key}: {value}")

# Round trip through a pcap file
write_pcap('arp_request.pcap', [data])
for frame in read_pcap('arp_request.pcap'):
    print(f"{frame.name}: {frame.protocol}, {frame.length} bytes")
