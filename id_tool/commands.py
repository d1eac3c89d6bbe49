# -*- coding: utf-8 -*-
import time
import logging
from dataclasses import dataclass
from typing import Iterable, List
from gevent.threadpool import ThreadPool
from pydantic import BaseModel
from snowid import IdGenerator, LogSuppress, base62, base36, parse_id, format_id
from snowid.snowflake import utc_datetime

_codecs = {
    'base62': base62,
    'base36': base36,
}


def encode(uid: int, encoding='dec') -> str:
    if codec := _codecs.get(encoding):
        return codec.encode(uid)
    return str(uid)


def decode(text: str, encoding='dec') -> int:
    if codec := _codecs.get(encoding):
        return codec.decode(text)
    return int(text)


class IdInfo(BaseModel):
    id: int
    time: str
    timestamp_ms: int
    datacenter_id: int
    worker_id: int
    sequence: int
    timestamp_delta: int

    @classmethod
    def from_id(cls, uid: int):
        parts = parse_id(uid)
        return cls(id=uid, time=utc_datetime(parts.timestamp_ms).isoformat(timespec='milliseconds'),
                   **parts._asdict())


@dataclass
class BenchResult:
    threads: int
    total: int
    distinct: int
    seconds: float

    @property
    def rate(self):
        return self.total / self.seconds if self.seconds > 0 else float('inf')

    @property
    def ok(self):
        return self.total == self.distinct


def gen(generator: IdGenerator, count: int, encoding='dec') -> List[str]:
    return [encode(generator.gen(), encoding) for _ in range(count)]


def _decode_all(texts: Iterable[str], encoding):
    for text in texts:
        with LogSuppress(ValueError):
            yield decode(text, encoding)


def parse(texts: Iterable[str], encoding='dec') -> List[IdInfo]:
    """decode ids, malformed ones are logged and skipped"""
    return [IdInfo.from_id(uid) for uid in _decode_all(texts, encoding)]


def format_ids(texts: Iterable[str], encoding='dec') -> List[str]:
    return [format_id(uid) for uid in _decode_all(texts, encoding)]


def _gen_many(generator: IdGenerator, count: int):
    return [generator.gen() for _ in range(count)]


def bench(generator: IdGenerator, threads: int, count: int) -> BenchResult:
    if threads <= 0 or count <= 0:
        raise ValueError(f'threads and count must be positive, got {threads} {count}')
    pool = ThreadPool(threads)
    try:
        start = time.perf_counter()
        results = [pool.spawn(_gen_many, generator, count) for _ in range(threads)]
        ids = [uid for result in results for uid in result.get()]
        seconds = time.perf_counter() - start
    finally:
        pool.kill()
    result = BenchResult(threads=threads, total=len(ids), distinct=len(set(ids)), seconds=seconds)
    if result.ok:
        logging.info(f'bench {result.total} ids in {seconds:.3f}s, {result.rate:.0f}/s')
    else:
        logging.error(f'bench duplicated ids: {result.total - result.distinct}')
    return result
