# SPDX-License-Identifier: MIT

import secrets
import threading
import time
import uuid
from typing import TypeAlias

EntityId: TypeAlias = str

ENTITY_ID_PREFIX = "tent"

UNSET_ENTITY_ID: EntityId = f"{ENTITY_ID_PREFIX}_{'0' * 32}"

_MAX_COUNTER = 0xFFF

_lock = threading.Lock()
_last_timestamp_ms = 0
_counter = 0


def _next_time_ordered_uuid() -> uuid.UUID:
    """
    Build a UUIDv7-layout value: 48 bit unix milliseconds, a 12 bit counter
    that keeps ids monotonic within the same millisecond, then 62 random bits.
    """
    global _last_timestamp_ms, _counter

    with _lock:
        timestamp_ms = time.time_ns() // 1_000_000
        if timestamp_ms > _last_timestamp_ms:
            _last_timestamp_ms = timestamp_ms
            # leave headroom so a burst within one millisecond rarely overflows
            _counter = secrets.randbits(10)
        else:
            _counter += 1
            if _counter > _MAX_COUNTER:
                _last_timestamp_ms += 1
                _counter = 0
        timestamp_ms = _last_timestamp_ms
        counter = _counter

    value = (timestamp_ms & 0xFFFF_FFFF_FFFF) << 80
    value |= 0x7 << 76
    value |= counter << 64
    value |= 0b10 << 62
    value |= secrets.randbits(62)
    return uuid.UUID(int=value)


def generate_entity_id() -> EntityId:
    return f"{ENTITY_ID_PREFIX}_{_next_time_ordered_uuid().hex}"


def is_entity_id(value: str) -> bool:
    prefix, _, suffix = value.partition("_")
    if prefix != ENTITY_ID_PREFIX or len(suffix) != 32:
        return False
    return all(character in "0123456789abcdef" for character in suffix)
