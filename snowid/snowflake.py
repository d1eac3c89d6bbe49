import time
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, NamedTuple, Optional

# 2023-01-01T00:00:00Z
twepoch = 1672531200000
unused_bits = 1
timestamp_bits = 41
datacenter_id_bits = 5
worker_id_bits = 5
sequence_id_bits = 12
id_bits = unused_bits + timestamp_bits + datacenter_id_bits + worker_id_bits + sequence_id_bits

max_timestamp = 1 << timestamp_bits
timestamp_mask = max_timestamp - 1
max_datacenter_id = 1 << datacenter_id_bits
datacenter_id_mask = max_datacenter_id - 1
max_worker_id = 1 << worker_id_bits
worker_id_mask = max_worker_id - 1
max_sequence_id = 1 << sequence_id_bits
sequence_id_mask = max_sequence_id - 1
id_mask = (1 << id_bits) - 1

worker_id_shift = sequence_id_bits
datacenter_id_shift = sequence_id_bits + worker_id_bits
timestamp_shift = sequence_id_bits + worker_id_bits + datacenter_id_bits

_utc_epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SnowflakeError(Exception):
    pass


class InvalidConfiguration(SnowflakeError, ValueError):
    pass


class ClockRegression(SnowflakeError, RuntimeError):
    def __init__(self, back_ms: int):
        super().__init__(f'clock moved backwards, refusing to generate id for {back_ms} milliseconds')
        self.back_ms = back_ms


class ClockStalled(SnowflakeError, RuntimeError):
    def __init__(self, last_ms: int, timeout: float):
        super().__init__(f'sequence exhausted at {last_ms} and clock did not advance in {timeout}s')
        self.last_ms = last_ms
        self.timeout = timeout


class Snowflake(NamedTuple):
    timestamp_ms: int
    datacenter_id: int
    worker_id: int
    sequence: int
    timestamp_delta: int


def epoch() -> int:
    return twepoch


def current_ms() -> int:
    return time.time_ns() // 1_000_000


def make(timestamp_ms: int, datacenter_id: int, worker_id: int, sequence_id: int) -> int:
    """pack the parts into a snowflake id.
    :param: timestamp_ms time since UNIX epoch in milliseconds"""
    delta = timestamp_ms - twepoch
    if not (0 <= delta < max_timestamp and 0 <= datacenter_id < max_datacenter_id and
            0 <= worker_id < max_worker_id and 0 <= sequence_id < max_sequence_id):
        raise ValueError(f'overflow {timestamp_ms} {datacenter_id} {worker_id} {sequence_id}')
    return (delta << timestamp_shift) | (datacenter_id << datacenter_id_shift) | \
        (worker_id << worker_id_shift) | sequence_id


def parse_id(snowflake_id: int) -> Snowflake:
    """inversely transform a snowflake id back to its parts.

    Only the low 64 bits are looked at and the unused top bit is dropped, so
    any integer decodes; a negative value is read as its two's complement.
    """
    snowflake_id &= id_mask
    sequence_id = snowflake_id & sequence_id_mask
    snowflake_id >>= sequence_id_bits
    worker_id = snowflake_id & worker_id_mask
    snowflake_id >>= worker_id_bits
    datacenter_id = snowflake_id & datacenter_id_mask
    snowflake_id >>= datacenter_id_bits
    delta = snowflake_id & timestamp_mask
    return Snowflake(delta + twepoch, datacenter_id, worker_id, sequence_id, delta)


def utc_datetime(timestamp_ms: int) -> datetime:
    """convert millisecond timestamp to an aware UTC datetime object."""
    return _utc_epoch + timedelta(milliseconds=timestamp_ms)


def extract_datetime(snowflake_id: int) -> datetime:
    return utc_datetime(parse_id(snowflake_id).timestamp_ms)


def from_datetime(dt: datetime) -> int:
    """smallest id that can be generated at `dt`, naive datetimes are local time."""
    timestamp_ms = int(dt.timestamp() * 1000)
    return make(timestamp_ms, 0, 0, 0)


def format_id(snowflake_id: int) -> str:
    parts = parse_id(snowflake_id)
    dt = utc_datetime(parts.timestamp_ms)
    return f'{dt:%Y-%m-%d %H:%M:%S}.{dt.microsecond // 1000:03d}, ' \
           f'#{parts.sequence}, ({parts.datacenter_id},{parts.worker_id})'


def _check_range(name: str, value: int, upperbound: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f'{name} must be int, got {value!r}')
    if not (0 <= value < upperbound):
        raise InvalidConfiguration(f'{name} out of range: {value} not in [0, {upperbound - 1}]')


class IdGenerator:
    """thread safe snowflake id generator.

    `clock` returns milliseconds since UNIX epoch. When the sequence of one
    millisecond is used up, `gen` spins on the clock until the next
    millisecond, giving up with `ClockStalled` after `wait_timeout` seconds
    (None spins forever).
    """

    def __init__(self, datacenter_id: int, worker_id: int, *, clock: Callable[[], int] = None,
                 wait_timeout: Optional[float] = 1.0):
        _check_range('datacenter_id', datacenter_id, max_datacenter_id)
        _check_range('worker_id', worker_id, max_worker_id)
        self._datacenter_id = datacenter_id
        self._worker_id = worker_id
        self._clock = clock or current_ms
        self._wait_timeout = wait_timeout
        self._lock = threading.Lock()
        self._last_ms = -1
        self._sequence_id = 0
        logging.info(f'created {self}')

    @property
    def datacenter_id(self):
        return self._datacenter_id

    @property
    def worker_id(self):
        return self._worker_id

    def gen(self) -> int:
        with self._lock:
            cur_ms = self._clock()
            if cur_ms < self._last_ms:
                back_ms = self._last_ms - cur_ms
                logging.error(f'clock moved backwards {back_ms}ms, last: {self._last_ms}, now: {cur_ms}')
                raise ClockRegression(back_ms)
            if cur_ms == self._last_ms:
                sequence_id = (self._sequence_id + 1) & sequence_id_mask
                if sequence_id == 0:
                    logging.debug(f'sequence exhausted at {cur_ms}')
                    cur_ms = self._til_next_ms()
            else:
                sequence_id = 0
            sid = make(cur_ms, self._datacenter_id, self._worker_id, sequence_id)
            self._last_ms = cur_ms
            self._sequence_id = sequence_id
            return sid

    next_id = gen

    def _til_next_ms(self) -> int:
        deadline = None if self._wait_timeout is None else time.monotonic() + self._wait_timeout
        cur_ms = self._clock()
        while cur_ms <= self._last_ms:
            if deadline is not None and time.monotonic() > deadline:
                logging.error(f'clock stalled at {cur_ms}, last: {self._last_ms}')
                raise ClockStalled(self._last_ms, self._wait_timeout)
            cur_ms = self._clock()
        return cur_ms

    def describe(self) -> str:
        return f'IdGenerator[timestamp_bits={timestamp_bits}, datacenter_id_bits={datacenter_id_bits}, ' \
               f'worker_id_bits={worker_id_bits}, sequence_id_bits={sequence_id_bits}, epoch={twepoch}, ' \
               f'datacenter_id={self._datacenter_id}, worker_id={self._worker_id}]'

    def __str__(self):
        return self.describe()

    def __repr__(self):
        return str(self)
