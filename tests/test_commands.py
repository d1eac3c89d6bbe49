import json
import logging

import pytest

from id_tool import commands
from id_tool.commands import IdInfo
from snowid import IdGenerator, base62, base36
from snowid.snowflake import make, parse_id


@pytest.fixture
def generator(fake_clock):
    return IdGenerator(3, 7, clock=fake_clock(1672531200123, hold=100))


def test_gen(generator):
    texts = commands.gen(generator, 5)
    ids = [int(text) for text in texts]
    assert len(set(ids)) == 5
    assert ids == sorted(ids)
    assert all(parse_id(uid)[1:3] == (3, 7) for uid in ids)


@pytest.mark.parametrize('encoding, codec', [('base62', base62), ('base36', base36)])
def test_gen_encoded(generator, encoding, codec):
    texts = commands.gen(generator, 3, encoding)
    ids = [codec.decode(text) for text in texts]
    assert [parse_id(uid).sequence for uid in ids] == [0, 1, 2]
    assert [commands.encode(uid, encoding) for uid in ids] == texts


def test_base62_order():
    ids = [make(1672531200123, 3, 7, seq) for seq in range(100)]
    texts = [base62.encode(uid) for uid in ids]
    assert len({len(text) for text in texts}) == 1
    assert texts == sorted(texts)
    assert base62.encode(0) == '0'
    with pytest.raises(ValueError):
        base62.encode(-1)
    with pytest.raises(ValueError):
        base36.decode('abc')


def test_parse():
    uid = make(1672531200123, 3, 7, 5)
    infos = commands.parse([str(uid)])
    assert infos == [IdInfo(id=uid, time='2023-01-01T00:00:00.123+00:00', timestamp_ms=1672531200123,
                            datacenter_id=3, worker_id=7, sequence=5, timestamp_delta=123)]
    data = json.loads(infos[0].model_dump_json())
    assert data['sequence'] == 5 and data['timestamp_delta'] == 123


def test_parse_skips_malformed(caplog):
    uid = make(1672531200123, 1, 2, 3)
    with caplog.at_level(logging.ERROR):
        infos = commands.parse(['oops', str(uid), ''])
    assert [info.id for info in infos] == [uid]
    assert 'suppressed' in caplog.text


def test_format_ids():
    uid = make(1672531200123, 3, 7, 5)
    assert commands.format_ids([str(uid), 'x1']) == ['2023-01-01 00:00:00.123, #5, (3,7)']
    assert commands.format_ids([base62.encode(uid)], 'base62') == ['2023-01-01 00:00:00.123, #5, (3,7)']


def test_bench():
    result = commands.bench(IdGenerator(1, 1), threads=4, count=2000)
    assert result.ok
    assert result.total == result.distinct == 8000
    assert result.threads == 4
    assert result.rate > 0


@pytest.mark.parametrize('threads, count', [(0, 10), (2, 0)])
def test_bench_rejects_non_positive(threads, count):
    with pytest.raises(ValueError):
        commands.bench(IdGenerator(1, 1), threads=threads, count=count)
