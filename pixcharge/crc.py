"""CRC16 trailer used by the BR Code payload (tag 63)."""

POLYNOMIAL = 0x1021
INITIAL = 0xFFFF


def checksum(data: str) -> str:
    """Compute CRC16-CCITT (0xFFFF) over the payload string.

    Returns exactly four uppercase hex digits.
    """
    crc = INITIAL
    for byte in data.encode("utf-8"):
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = (crc << 1) ^ POLYNOMIAL
            else:
                crc <<= 1
            crc &= 0xFFFF
    return f"{crc:04X}"
